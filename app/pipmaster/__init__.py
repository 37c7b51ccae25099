"""pipmaster - a dashboard for Python packages with AI-assisted metadata."""

__version__ = "0.1.0"
