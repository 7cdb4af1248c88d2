"""Knative Serving label keys used for relationship traversal."""


class KnativeLabels:
    """Label keys set by Knative Serving on the objects it manages."""

    SERVICE = "serving.knative.dev/service"
    CONFIGURATION = "serving.knative.dev/configuration"
    CONFIGURATION_GENERATION = "serving.knative.dev/configurationGeneration"
    REVISION = "serving.knative.dev/revision"

    @staticmethod
    def filter_selector(**labels: str) -> str:
        """Build a label selector string from key/value pairs.

        Example:
            filter_selector(**{KnativeLabels.SERVICE: "hello"})
            -> "serving.knative.dev/service=hello"
        """
        return ",".join(f"{k}={v}" for k, v in labels.items())

    @classmethod
    def generation(cls, labels: dict[str, str] | None) -> int:
        """Return the configuration generation recorded on a revision.

        Missing or unparsable values are reported as -1.
        """
        value = (labels or {}).get(cls.CONFIGURATION_GENERATION)
        if value is None:
            return -1
        try:
            return int(value)
        except (TypeError, ValueError):
            return -1
