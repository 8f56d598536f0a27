"""Row index to commit identity translation."""

from __future__ import annotations

from typing import Callable, List, Optional

from ..errors import RowOutOfRangeError
from ..models.commit import EntityId
from ..models.refs import Ref
from ..models.visible_pack import VisiblePack


class EntityIdentityResolver:
    """Resolve rows against whatever visible pack is current.

    Nothing is cached between calls: the pack is fetched through
    *pack_getter* every time so a replacement is observed immediately.
    """

    def __init__(self, pack_getter: Callable[[], VisiblePack]) -> None:
        self._pack_getter = pack_getter

    def row_count(self) -> int:
        return self._pack_getter().row_count()

    def id_at(self, row: int) -> EntityId:
        pack = self._pack_getter()
        return self._id_in(pack, row)

    def root_at(self, row: int) -> Optional[str]:
        return self._pack_getter().root(row)

    def refs_at(self, row: int) -> List[Ref]:
        pack = self._pack_getter()
        return pack.refs.refs_to_commit(self._id_in(pack, row))

    def branches_at(self, row: int) -> List[Ref]:
        return [ref for ref in self.refs_at(row) if ref.type.is_branch]

    def row_of(self, commit: EntityId) -> Optional[int]:
        """Return the row showing *commit*, or ``None`` when it is not visible."""

        return self._pack_getter().visible_graph.visible_row_of(commit)

    @staticmethod
    def _id_in(pack: VisiblePack, row: int) -> EntityId:
        # Checked here as well so third-party graphs with looser bounds
        # checking still fail with the same error.
        count = pack.row_count()
        if not 0 <= row < count:
            raise RowOutOfRangeError(row, count)
        return pack.visible_graph.row_info(row).commit
