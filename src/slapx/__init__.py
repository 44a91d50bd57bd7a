""" Slapx runs the scripts defined for the Python project that you are currently in, surrounded by optional
lifecycle hooks, and reports the script's exit code back to you. """

__version__ = "0.1.0"
