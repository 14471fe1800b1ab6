"""
This module persists generated bodies for external tools.

DataWriter owns an output directory (created on construction if missing) and writes
one sequentially numbered frame-<n>.txt file per call, each line holding the x,y
position of one body. write_csv stores the full body table, provenance included, via
pandas. It assumes the caller has permission to write into the chosen directory.
"""

from __future__ import annotations

import os
from typing import Sequence

from .body import Body
from .body_arrays import bodies_to_frame


class DataWriter:

	def __init__(self, directory: str) -> None:
		os.makedirs(directory, exist_ok=True)
		self.directory = directory
		self.counter = 0

	def write(self, bodies: Sequence[Body]) -> str:
		path = os.path.join(self.directory, f"frame-{self.counter}.txt")
		with open(path, "w") as f:
			for b in bodies:
				f.write(f"{b.x},{b.y}\n")
		self.counter += 1
		return path


def write_csv(bodies: Sequence[Body], path: str) -> None:
	bodies_to_frame(bodies).to_csv(path, index=False)
