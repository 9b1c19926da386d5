"""
This package provides the configuration helpers shared across quatvec.

:class:`.UserOptions` is the base dataclass for option sets and :class:`.UserOptionConfigured` is the mixin that
applies an option set to a class instance and can restore it later.
"""

from quatvec.utilities.options import UserOptions
from quatvec.utilities.mixin_classes import UserOptionConfigured

__all__ = ['UserOptions', 'UserOptionConfigured']
