"""
Registry for provisioning steps.

This module provides a registry that step modules register themselves with
and a decorator for registering step classes.
"""

from typing import Any, Dict, List, Optional, Set, Type

from modular.base_step import BaseStep


class StepRegistry:
    """
    Registry for provisioning steps.

    Maps step names to step classes and orders them by declared dependencies.
    """

    _registry: Dict[str, Type[BaseStep]] = {}

    @classmethod
    def register(cls, name: str, metadata: Optional[Dict[str, Any]] = None):
        """
        Decorator for registering step classes.

        Args:
            name: The name of the step.
            metadata: Optional metadata for the step, such as dependencies
                      and a description.

        Returns:
            A decorator function that registers the step class.
        """

        def decorator(step_class: Type[BaseStep]) -> Type[BaseStep]:
            if name in cls._registry:
                raise ValueError(f"Step with name '{name}' already registered")

            if metadata:
                step_class.metadata = metadata
            step_class.name = name

            cls._registry[name] = step_class
            return step_class

        return decorator

    @classmethod
    def unregister(cls, name: str) -> None:
        cls._registry.pop(name, None)

    @classmethod
    def get_step(cls, name: str) -> Type[BaseStep]:
        """
        Get a step class by name.

        Raises:
            KeyError: If no step with the given name is registered.
        """
        if name not in cls._registry:
            raise KeyError(f"No step registered with name '{name}'")

        return cls._registry[name]

    @classmethod
    def get_all_steps(cls) -> Dict[str, Type[BaseStep]]:
        return cls._registry.copy()

    @classmethod
    def get_step_dependencies(cls, name: str) -> List[str]:
        step_class = cls.get_step(name)
        metadata = getattr(step_class, "metadata", {})
        return list(metadata.get("dependencies", []))

    @classmethod
    def resolve_order(cls, steps: List[str]) -> List[str]:
        """
        Order steps so that every step follows its dependencies.

        Steps keep their relative order from `steps` wherever dependencies
        allow it. Dependencies that are not listed are pulled in ahead of the
        step that needs them.

        Raises:
            KeyError: If any of the steps or their dependencies are not registered.
            ValueError: If there is a circular dependency.
        """
        result: List[str] = []
        visited: Set[str] = set()
        temp_visited: Set[str] = set()

        def visit(step: str):
            if step in temp_visited:
                raise ValueError(
                    f"Circular dependency detected involving '{step}'"
                )

            if step in visited:
                return

            temp_visited.add(step)

            for dependency in cls.get_step_dependencies(step):
                visit(dependency)

            temp_visited.remove(step)
            visited.add(step)
            result.append(step)

        for step in steps:
            if step not in visited:
                visit(step)

        return result
