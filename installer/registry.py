"""
Registry for component modules.

This module provides a registry for component modules to register themselves
and a decorator for registering component classes.
"""

from typing import Any, Dict, Optional, Type

from common.errors import UnknownComponent
from installer.base_component import BaseComponent


class ComponentRegistry:
    """
    Registry for component modules.

    Components are kept in registration order, which is the declaration
    order shown in menus and help output.
    """

    _registry: Dict[str, Type["BaseComponent"]] = {}

    @classmethod
    def register(cls, name: str, metadata: Optional[Dict[str, Any]] = None):
        """
        Decorator for registering component classes.

        Args:
            name: The identifier of the component.
            metadata: Optional class attributes to set on the component,
                such as label, kind, default_selected and required_settings.

        Returns:
            A decorator function that registers the component class.
        """

        def decorator(
            component_class: Type["BaseComponent"],
        ) -> Type["BaseComponent"]:
            if name in cls._registry:
                raise ValueError(
                    f"Component with name '{name}' already registered"
                )

            component_class.identifier = name
            for key, value in (metadata or {}).items():
                setattr(component_class, key, value)

            cls._registry[name] = component_class
            return component_class

        return decorator

    @classmethod
    def get_component(cls, name: str) -> Type["BaseComponent"]:
        """
        Get a component class by name.

        Raises:
            UnknownComponent: If no component with the given name is registered.
        """
        if name not in cls._registry:
            raise UnknownComponent(name)

        return cls._registry[name]

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._registry

    @classmethod
    def get_all_components(cls) -> Dict[str, Type["BaseComponent"]]:
        """
        Get all registered components.

        Returns:
            A dictionary mapping component names to component classes, in
            registration order.
        """
        return cls._registry.copy()
