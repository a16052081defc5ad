# sunshadow/models/shape_collection.py

import logging
from typing import Dict, Iterator, List, Optional

from sunshadow.core.common_types import as_vector3
from sunshadow.models.model_definitions import Shape, editable_field_names

_VECTOR_FIELDS = ("position", "rotation")
_AXES = {"x": 0, "y": 1, "z": 2}


class ShapeCollection:
    """
    Ordered set of shapes keyed by id, plus the single selected id.

    Shapes keep insertion order. Every mutation completes before it returns, so a
    reader never sees a half-applied update.
    """

    def __init__(self):
        self._shapes: Dict[str, Shape] = {}
        self._selected_id: Optional[str] = None
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(list(self._shapes.values()))

    def __contains__(self, shape_id: object) -> bool:
        return shape_id in self._shapes

    @property
    def ids(self) -> List[str]:
        return list(self._shapes)

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected(self) -> Optional[Shape]:
        if self._selected_id is None:
            return None
        return self._shapes[self._selected_id]

    def get(self, shape_id: str) -> Shape:
        try:
            return self._shapes[shape_id]
        except KeyError:
            raise KeyError(f"No shape with id '{shape_id}'.") from None

    def add(self, shape: Shape) -> Shape:
        if shape.id in self._shapes:
            msg = f"A shape with id '{shape.id}' already exists."
            self.logger.error(msg)
            raise ValueError(msg)
        self._shapes[shape.id] = shape
        self.logger.info(f"Added {shape.shape_type.value} '{shape.id}' ({len(self._shapes)} shapes).")
        return shape

    def update(self, shape_id: str, **changes) -> Shape:
        """
        Applies field changes to the shape in place.

        Values are stored as given. Dimensions are not range-checked here; a
        non-positive size simply produces degenerate geometry downstream.

        Raises:
            KeyError: If no shape has this id.
            TypeError: If a change names a field this shape variant does not have.
        """
        shape = self.get(shape_id)
        allowed = editable_field_names(shape)
        unknown = [name for name in changes if name not in allowed]
        if unknown:
            raise TypeError(f"{type(shape).__name__} has no editable field(s): {', '.join(unknown)}")

        # Validate everything before touching the shape
        prepared = {}
        for name, value in changes.items():
            prepared[name] = as_vector3(value) if name in _VECTOR_FIELDS else value
        for name, value in prepared.items():
            setattr(shape, name, value)
        self.logger.debug(f"Updated shape '{shape_id}': {sorted(prepared)}")
        return shape

    def update_vector(self, shape_id: str, vector_name: str, axis: str, value: float) -> Shape:
        """Sets one component ("x", "y" or "z") of a shape's position or rotation."""
        if vector_name not in _VECTOR_FIELDS:
            raise ValueError(f"vector_name must be one of {_VECTOR_FIELDS}, got '{vector_name}'.")
        if axis not in _AXES:
            raise ValueError(f"axis must be one of {tuple(_AXES)}, got '{axis}'.")
        vector = getattr(self.get(shape_id), vector_name).copy()
        vector[_AXES[axis]] = value
        return self.update(shape_id, **{vector_name: vector})

    def remove(self, shape_id: str) -> Optional[Shape]:
        """Removes a shape by id. Clears the selection when it pointed at that shape."""
        removed = self._shapes.pop(shape_id, None)
        if removed is None:
            self.logger.warning(f"Attempted to remove shape not in collection: {shape_id}")
            return None
        if self._selected_id == shape_id:
            self._selected_id = None
            self.logger.debug(f"Selection cleared, '{shape_id}' was removed.")
        self.logger.info(f"Removed shape '{shape_id}' ({len(self._shapes)} shapes left).")
        return removed

    def select(self, shape_id: Optional[str]) -> None:
        """Selects a shape by id, or clears the selection with None."""
        if shape_id is not None and shape_id not in self._shapes:
            raise KeyError(f"No shape with id '{shape_id}'.")
        self._selected_id = shape_id
