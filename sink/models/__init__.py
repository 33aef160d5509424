from .films import Film, decode_film

__all__ = ["Film", "decode_film"]
