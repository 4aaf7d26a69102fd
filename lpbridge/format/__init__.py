from lpbridge.format.lp_format import to_lp_format

__all__ = ["to_lp_format"]
