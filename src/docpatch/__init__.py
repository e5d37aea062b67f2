""" Keep the version numbers and archive settings of a documentation site in sync with the build. """

__version__ = "0.1.0"
