# -*- coding: utf-8 -*-
"""
Wizard Engine Application Core Module
"""

from .config import Config

__all__ = ["Config"]
