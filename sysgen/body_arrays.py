import numpy as np
import pandas as pd
from collections import Counter
from dataclasses import replace
from typing import Dict, List, Sequence, Tuple

from .body import Body

"""
This module converts generated Body records into the array and table layouts consumed by simulation and analysis code. to_arrays returns masses (n,), positions (n, 2), velocities (n, 2) and rotations (n,) as float arrays, optionally shifted into the centre-of-mass frame with remove_center_of_mass_velocity. to_com_frame applies the same shift to the Body records themselves. bodies_to_frame builds a pandas DataFrame with one row per body including provenance columns, and summarize reports total mass, centre of mass position and velocity and per-template counts. The functions handle an empty body list and zero total mass gracefully and assume bodies are already fully resolved.

"""


FRAME_COLUMNS = ["template", "system_path", "index", "mass", "x", "y", "vx", "vy", "rotation"]


def remove_center_of_mass_velocity(
	masses: np.ndarray, velocities: np.ndarray
) -> np.ndarray:
	if len(masses) <= 1:
		return velocities.copy()
	total_mass = float(np.sum(masses))
	if total_mass == 0 or velocities.size == 0:
		return velocities.copy()
	v_cm = np.sum(masses[:, None] * velocities, axis=0) / total_mass
	return velocities - v_cm


def to_arrays(
	bodies: Sequence[Body], com_frame: bool = False
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
	n = len(bodies)
	m = np.zeros(n, dtype=float)
	p = np.zeros((n, 2), dtype=float)
	v = np.zeros((n, 2), dtype=float)
	r = np.zeros(n, dtype=float)
	for i, b in enumerate(bodies):
		m[i] = b.mass
		p[i] = b.translation
		v[i] = b.velocity
		r[i] = b.rotation
	if com_frame:
		v = remove_center_of_mass_velocity(m, v)
	return m, p, v, r


def to_com_frame(bodies: Sequence[Body]) -> List[Body]:
	_, _, v, _ = to_arrays(bodies, com_frame=True)
	return [replace(b, velocity=(float(v[i, 0]), float(v[i, 1]))) for i, b in enumerate(bodies)]


def bodies_to_frame(bodies: Sequence[Body]) -> pd.DataFrame:
	rows = []
	for b in bodies:
		rows.append({
			"template": b.template,
			"system_path": b.system_path,
			"index": b.index,
			"mass": b.mass,
			"x": b.x,
			"y": b.y,
			"vx": b.vx,
			"vy": b.vy,
			"rotation": b.rotation,
		})
	return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def summarize(bodies: Sequence[Body]) -> Dict[str, object]:
	m, p, v, _ = to_arrays(bodies)
	total_mass = float(np.sum(m))
	if total_mass > 0.0:
		com_pos = np.sum(m[:, None] * p, axis=0) / total_mass
		com_vel = np.sum(m[:, None] * v, axis=0) / total_mass
	else:
		com_pos = np.zeros(2)
		com_vel = np.zeros(2)
	return {
		"n_bodies": len(bodies),
		"total_mass": total_mass,
		"com_position": (float(com_pos[0]), float(com_pos[1])),
		"com_velocity": (float(com_vel[0]), float(com_vel[1])),
		"per_template": dict(Counter(b.template for b in bodies)),
	}
