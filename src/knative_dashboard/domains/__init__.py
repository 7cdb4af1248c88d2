"""Resource domains rendered by the dashboard plugin."""
