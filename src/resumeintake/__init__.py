"""Resume intake: candidate filtering and experience normalisation."""

__version__ = "0.1.0"
