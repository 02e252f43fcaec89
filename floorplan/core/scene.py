"""Scene graph: the single owner of every wall and shape."""

from __future__ import annotations
import uuid
from typing import Any

from pydantic import BaseModel, TypeAdapter

from floorplan.models import Wall, Shape, ShapeBase
from floorplan.core.errors import EntityNotFoundError


_shape_adapter: TypeAdapter[Shape] = TypeAdapter(Shape)


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class SceneGraph(BaseModel):
    """
    Mutable collection of walls and shapes.

    The commit and slice algorithms receive the scene explicitly and
    mutate it in place; there is no module-level scene.
    """
    walls: list[Wall] = []
    shapes: list[Shape] = []

    # Walls

    def list_walls(self) -> list[Wall]:
        return list(self.walls)

    def find_wall(self, wall_id: str) -> Wall | None:
        for w in self.walls:
            if w.id == wall_id:
                return w
        return None

    def get_wall(self, wall_id: str) -> Wall:
        wall = self.find_wall(wall_id)
        if wall is None:
            raise EntityNotFoundError("wall", wall_id)
        return wall

    def add_wall(self, wall: Wall) -> Wall:
        self.walls.append(wall)
        return wall

    def update_wall(self, wall_id: str, updates: dict[str, Any]) -> Wall:
        """Replace fields of a wall; the id cannot change."""
        current = self.get_wall(wall_id)
        data = current.model_dump()
        data.update(updates)
        data["id"] = wall_id
        updated = Wall.model_validate(data)
        self.walls[self.walls.index(current)] = updated
        return updated

    def remove_wall(self, wall_id: str) -> Wall:
        wall = self.get_wall(wall_id)
        self.walls.remove(wall)
        return wall

    # Shapes

    def list_shapes(self) -> list[ShapeBase]:
        return list(self.shapes)

    def find_shape(self, shape_id: str) -> ShapeBase | None:
        for s in self.shapes:
            if s.id == shape_id:
                return s
        return None

    def get_shape(self, shape_id: str) -> ShapeBase:
        shape = self.find_shape(shape_id)
        if shape is None:
            raise EntityNotFoundError("shape", shape_id)
        return shape

    def add_shape(self, shape: ShapeBase) -> ShapeBase:
        self.shapes.append(shape)
        return shape

    def update_shape(self, shape_id: str, updates: dict[str, Any]) -> ShapeBase:
        """Replace fields of a shape; changing ``type`` switches variant."""
        current = self.get_shape(shape_id)
        data = current.model_dump()
        data.update(updates)
        data["id"] = shape_id
        updated = _shape_adapter.validate_python(data)
        self.shapes[self.shapes.index(current)] = updated
        return updated

    def remove_shape(self, shape_id: str) -> ShapeBase:
        shape = self.get_shape(shape_id)
        self.shapes.remove(shape)
        return shape

    # Bookkeeping

    def next_z_index(self) -> int:
        items = [w.z_index for w in self.walls] + [s.z_index for s in self.shapes]
        if not items:
            return 1
        return max(items) + 1

    def snapshot(self) -> SceneGraph:
        """Deep copy suitable for history storage."""
        return self.model_copy(deep=True)

    def restore(self, snapshot: SceneGraph) -> None:
        copy = snapshot.model_copy(deep=True)
        self.walls = copy.walls
        self.shapes = copy.shapes


def parse_shape(data: dict[str, Any]) -> ShapeBase:
    """Validate a raw shape mapping into the matching variant."""
    return _shape_adapter.validate_python(data)
