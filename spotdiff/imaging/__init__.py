"""Image source: decode encoded images into PixelBuffers."""

from spotdiff.imaging.loader import decode_image, decode_pair, encode_data_url

__all__ = ["decode_image", "decode_pair", "encode_data_url"]
