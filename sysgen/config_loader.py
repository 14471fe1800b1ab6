import json
import os
from typing import Any, Dict

import yaml

from .exceptions import ConfigurationError

"""
This module reads system configuration documents from disk into the generic tree consumed by SystemGenerator. YAML files (.yaml/.yml) are parsed with yaml.safe_load and JSON files with json.load; any other extension is tried as YAML, which also accepts JSON. An empty document yields an empty tree. Parse failures and non-mapping documents raise ConfigurationError with the offending path so the caller can report them.

"""


def load_config(path: str) -> Dict[str, Any]:
	ext = os.path.splitext(path)[1].lower()
	try:
		with open(path, "r", encoding="utf-8") as f:
			if ext == ".json":
				data = json.load(f)
			else:
				data = yaml.safe_load(f)
	except (json.JSONDecodeError, yaml.YAMLError) as exc:
		raise ConfigurationError(f"{path}: cannot parse configuration: {exc}") from exc

	if data is None:
		return {}
	if not isinstance(data, dict):
		raise ConfigurationError(f"{path}: top level must be a mapping, got {type(data).__name__}")
	return data
