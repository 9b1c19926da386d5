"""
This module provides the :class:`UserOptionConfigured` mixin class that enables classes to be configured using
:class:`.UserOptions` derived classes while keeping the ability to reset to the original configuration.

Example:
    Basic usage of the UserOptionConfigured mixin::

        from dataclasses import dataclass

        from quatvec.utilities.options import UserOptions
        from quatvec.utilities.mixin_classes.user_option_configured import UserOptionConfigured

        @dataclass
        class BlendOptions(UserOptions):
            method: str = 'slerp'

        class Blender(UserOptionConfigured[BlendOptions], BlendOptions):
            def __init__(self, options: BlendOptions | None = None):
                super().__init__(BlendOptions, options=options)

        blender = Blender()
        blender.method = 'lerp'
        blender.reset_settings()
        print(blender.method)  # slerp

.. Note::
    The :class:`UserOptionConfigured` class should come first in the inheritance order.
"""

from typing import Generic, TypeVar

from quatvec.utilities.options import UserOptions


OptionsT = TypeVar("OptionsT", bound=UserOptions)
"""
Type variable bound to UserOptions for type safety
"""


class UserOptionConfigured(Generic[OptionsT]):
    """
    Mixin class providing UserOptions based configuration with reset capability.

    :attr original_options: The options used during initialization, which :meth:`reset_settings` reapplies.

    .. Warning::
        If options are not provided during initialization, default initialization of the options_type class will be
        used.
    """

    def __init__(self, options_type: type[OptionsT], *args, options: OptionsT | None = None, **kwargs) -> None:
        """
        :param options_type: The type of the :class:`.UserOptions` to use
        :param options: An optional instance of `options_type` preconfigured.
        """

        super().__init__(*args, **kwargs)

        if options is None:
            options = options_type()

        options.apply_options(self)

        self._original_options: OptionsT = options
        """
        The original configuration for this class
        """

    def reset_settings(self) -> None:
        """
        Resets the class to the state it was originally initialized with.
        """

        self.original_options.apply_options(self)

    @property
    def original_options(self) -> OptionsT:
        """
        The original configuration options.

        .. Warning::
            Modifying the returned object will affect reset behavior.
        """
        return self._original_options
