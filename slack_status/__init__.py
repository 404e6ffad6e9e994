"""slack-status: set your Slack status from the public IP you are connecting from."""

__version__ = "0.4.0"
