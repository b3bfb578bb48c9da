"""habo-data: local/remote repository layer for the Habo habit tracker."""

__version__ = "0.1.0"
