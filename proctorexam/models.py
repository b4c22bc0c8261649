"""
Read-only records decoded from ProctorExam API responses.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from .exceptions import DecodeError


def _record_kwargs(cls, data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"{cls.__name__} must be a JSON object, got {type(data).__name__}")

    record_id = data.get('id')
    if isinstance(record_id, bool) or not isinstance(record_id, int):
        raise DecodeError(f"{cls.__name__} has no integer id: {record_id!r}")

    # unknown keys are ignored, absent ones stay None
    return {f.name: data.get(f.name) for f in fields(cls)}


@dataclass(frozen=True)
class Exam:
    id: int
    institute_id: Optional[int] = None
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Exam":
        return cls(**_record_kwargs(cls, data))


@dataclass(frozen=True)
class User:
    id: int
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    logo_image: Optional[str] = None
    institute_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "User":
        return cls(**_record_kwargs(cls, data))


@dataclass(frozen=True)
class Student:
    id: int
    email: Optional[str] = None
    name: Optional[str] = None
    status: Optional[str] = None
    exam_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Student":
        return cls(**_record_kwargs(cls, data))
