# -*- coding: utf-8 -*-
"""
Morphological Forms - Scanline extraction of same-band connected regions.

A brightness-band map is scanned band by band and row by row. Each row is
split into maximal runs of pixels of the current band; each run is linked
to the runs of the previous row whose column ranges overlap it:

- no overlapping previous run: the run starts a new form;
- the first overlapping previous run: the run joins that run's form;
- every further overlapping previous run that belongs to a different form:
  that form is merged into the run's form and cleared.

Forms live in a ``FormArena`` and are addressed by index. Merged forms are
left in the arena as empty tombstones, so run records still pointing at
them keep a valid index; a later run linking to such a record adds its
pixels to the tombstone, which then becomes a separate form again.
Empty forms are dropped only when the arena is compacted at the end.

Dependencies
------------
numpy

Author
------
GIAL Developers

License
-------
MIT License
Copyright (c) 2026 GIAL Developers
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import logging
from typing import Iterator, List, Tuple

# Third-party
import numpy as np

logger = logging.getLogger(__name__)

# (start_x, finish_x, band) with inclusive column bounds.
Run = Tuple[int, int, int]


class MorphologicalForm:
    """Ordered ``(x, y)`` pixel list of one connected same-band region."""

    __slots__ = ('_xs', '_ys')

    def __init__(self) -> None:
        self._xs: List[int] = []
        self._ys: List[int] = []

    def append(self, x: int, y: int) -> None:
        self._xs.append(x)
        self._ys.append(y)

    def append_run(self, y: int, start_x: int, finish_x: int) -> None:
        """Append the pixels ``start_x..finish_x`` of row *y*."""
        self._xs.extend(range(start_x, finish_x + 1))
        self._ys.extend([y] * (finish_x - start_x + 1))

    def merge(self, other: 'MorphologicalForm') -> None:
        """Absorb the pixels of *other* (which is left unchanged)."""
        self._xs.extend(other._xs)
        self._ys.extend(other._ys)

    def clear(self) -> None:
        self._xs.clear()
        self._ys.clear()

    @property
    def is_empty(self) -> bool:
        return not self._xs

    def coordinates(self) -> Tuple[np.ndarray, np.ndarray]:
        """``(ys, xs)`` index arrays usable for fancy indexing."""
        return np.asarray(self._ys, dtype=np.intp), np.asarray(self._xs, dtype=np.intp)

    def __len__(self) -> int:
        return len(self._xs)

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        return zip(self._xs, self._ys)

    def __repr__(self) -> str:
        return f"MorphologicalForm({len(self)} pixels)"


class FormArena:
    """Index-stable collection of forms; merged forms stay as tombstones."""

    def __init__(self) -> None:
        self._forms: List[MorphologicalForm] = []

    def new_form(self) -> int:
        self._forms.append(MorphologicalForm())
        return len(self._forms) - 1

    def merge(self, target: int, source: int) -> None:
        """Move every pixel of form *source* into form *target*."""
        self._forms[target].merge(self._forms[source])
        self._forms[source].clear()

    def compact(self) -> List[MorphologicalForm]:
        """Non-empty forms in creation order."""
        return [form for form in self._forms if not form.is_empty]

    def __getitem__(self, index: int) -> MorphologicalForm:
        return self._forms[index]

    def __len__(self) -> int:
        return len(self._forms)


def row_runs(row: np.ndarray) -> List[Run]:
    """Maximal runs of equal values in one row."""
    if row.size == 0:
        return []
    boundaries = np.flatnonzero(row[1:] != row[:-1]) + 1
    starts = np.concatenate(([0], boundaries))
    finishes = np.concatenate((boundaries - 1, [row.size - 1]))
    return [(int(s), int(f), int(row[s])) for s, f in zip(starts, finishes)]


def _intersects(a_start: int, a_finish: int, b_start: int, b_finish: int) -> bool:
    return a_start <= b_finish and b_start <= a_finish


def find_forms(bands: np.ndarray, num_mods: int) -> List[MorphologicalForm]:
    """Connected regions of every band ``0..num_mods - 1`` of *bands*.

    Parameters
    ----------
    bands : np.ndarray
        2D band index per pixel.
    num_mods : int
        Number of bands to scan.

    Returns
    -------
    List[MorphologicalForm]
        Non-empty forms, band-major and in creation order.
    """
    arena = FormArena()
    runs_per_row = [row_runs(row) for row in bands]
    for mod in range(num_mods):
        previous: List[Tuple[int, int, int]] = []
        for y, runs in enumerate(runs_per_row):
            current: List[Tuple[int, int, int]] = []
            for start, finish, band in runs:
                if band != mod:
                    continue
                form_index = -1
                for prev_start, prev_finish, prev_form in previous:
                    if not _intersects(start, finish, prev_start, prev_finish):
                        continue
                    if form_index == -1:
                        form_index = prev_form
                        arena[form_index].append_run(y, start, finish)
                    elif form_index != prev_form:
                        arena.merge(form_index, prev_form)
                if form_index == -1:
                    form_index = arena.new_form()
                    arena[form_index].append_run(y, start, finish)
                current.append((start, finish, form_index))
            previous = current
    forms = arena.compact()
    logger.debug("Scanline linking: %d forms allocated, %d non-empty",
                 len(arena), len(forms))
    return forms
