from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class JsonKeyValueStore:
	"""String key/value slots persisted together in one JSON file."""

	path: Path
	_data: Dict[str, str] = field(init=False, default_factory=dict)
	_loaded: bool = field(init=False, default=False)

	# ------------------------------------------------------------------
	# Public API
	# ------------------------------------------------------------------
	def get(self, key: str) -> Optional[str]:
		self._ensure_loaded()
		return self._data.get(key)

	def set(self, key: str, value: str) -> None:
		if not self._loaded:
			try:
				self.reload()
			except ValueError:
				logger.warning("Overwriting unreadable key-value file %s", self.path, exc_info=True)
				self._data = {}
				self._loaded = True
		new_data = dict(self._data)
		new_data[key] = value
		self._persist(new_data)
		self._data = new_data

	def reload(self) -> None:
		self._data = self._read()
		self._loaded = True

	# ------------------------------------------------------------------
	# Internal helpers
	# ------------------------------------------------------------------
	def _ensure_loaded(self) -> None:
		if not self._loaded:
			self.reload()

	def _read(self) -> Dict[str, str]:
		if not self.path.exists():
			return {}

		with self.path.open("r", encoding="utf-8") as handle:
			payload = json.load(handle)

		if not isinstance(payload, dict):
			raise ValueError(f"{self.path} does not contain a JSON object.")
		return {str(key): value for key, value in payload.items() if isinstance(value, str)}

	def _persist(self, data: Dict[str, str]) -> None:
		self.path.parent.mkdir(parents=True, exist_ok=True)
		temp_path = self.path.with_name(f"{self.path.name}.tmp")

		with temp_path.open("w", encoding="utf-8") as handle:
			json.dump(data, handle, indent=2)

		os.replace(temp_path, self.path)
