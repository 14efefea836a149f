"""clover-summary: Clover coverage reports rendered as pull-request Markdown."""

__version__ = "0.1.0"
