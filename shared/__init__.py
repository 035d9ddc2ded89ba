"""
elfsize Shared Module
======================

Configuration, logging and console utilities used by the elfsize
components.
"""

from shared.config import ElfSizeConfig

__all__ = ["ElfSizeConfig"]
