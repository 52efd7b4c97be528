"""Investment ROI / cash-flow projection toolkit for the OneStop Centre portal."""

__version__ = "0.1.0"
