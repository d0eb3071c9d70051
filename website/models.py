from dataclasses import asdict, dataclass
from typing import Dict, Mapping

from .constants import APPOINTMENT_FIELDS


# Records live in the dual store as JSON, not in the database.
@dataclass(frozen=True)
class ServiceRecord:
	name: str
	description: str = ""
	icon: str = ""

	@classmethod
	def from_dict(cls, data: Mapping) -> "ServiceRecord":
		return cls(
			name=str(data["name"]),
			description=str(data.get("description") or ""),
			icon=str(data.get("icon") or ""),
		)

	def to_dict(self) -> Dict[str, str]:
		return asdict(self)


@dataclass(frozen=True)
class AppointmentRecord:
	name: str = ""
	email: str = ""
	pet: str = ""
	service: str = ""
	date: str = ""

	@classmethod
	def from_dict(cls, data: Mapping) -> "AppointmentRecord":
		# missing fields render as empty cells
		return cls(**{f: str(data.get(f) or "") for f in APPOINTMENT_FIELDS})

	def __str__(self):
		return f"{self.name} - {self.pet} {self.service} {self.date}"
