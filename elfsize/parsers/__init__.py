"""Byte sources and struct-based ELF decoders."""
