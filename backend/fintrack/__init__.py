from fintrack.app import create_app

__version__ = "0.1.0"
