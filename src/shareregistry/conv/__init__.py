from .conv import parse_timestamp, to_dec, to_dec_strict, to_quantity

__all__ = ["parse_timestamp", "to_dec", "to_dec_strict", "to_quantity"]
