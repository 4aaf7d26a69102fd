from lpbridge.readers.lines import LineReader

__all__ = ["LineReader"]
