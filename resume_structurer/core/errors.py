class DocumentExtractionError(Exception):
    """The document stream could not be read, or it holds no text at all."""
