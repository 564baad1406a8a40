#!/usr/bin/python
# -*- coding: utf-8 -*-

# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Dict, Any, Optional, Tuple


@dataclass
class OrganizationRecord:
    """Locally tracked projection of one InfluxDB organization.

    An empty ``id`` means the organization is not tracked.
    """

    id: str = ''
    name: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    created_timestamp: Optional[int] = None
    updated_timestamp: Optional[int] = None

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> 'OrganizationRecord':
        """Build the desired record from module parameters"""
        return cls(
            id=params.get('id') or '',
            name=params.get('name'),
            description=params.get('description')
        )

    def clear(self):
        """Drop the identity so the record is no longer tracked"""
        self.id = ''

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _utc(value) -> Optional[datetime]:
    if value is None:
        return None
    if not isinstance(value, datetime):
        raise TypeError(f"expected a datetime, got {type(value).__name__}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _render_time(value) -> Tuple[Optional[str], Optional[int]]:
    """UTC ISO-8601 string and Unix seconds for one server timestamp"""
    moment = _utc(value)
    if moment is None:
        return None, None
    return moment.isoformat(), int(moment.timestamp())


def set_organization_resource_data(record: OrganizationRecord, organization) -> OrganizationRecord:
    """
    Project an API organization onto a record.

    Every value is computed before the record is touched, so a bad field
    raises without leaving the record half written.
    """
    created_at, created_timestamp = _render_time(organization.created_at)
    updated_at, updated_timestamp = _render_time(organization.updated_at)

    record.id = organization.id
    record.name = organization.name
    record.description = organization.description
    record.created_at = created_at
    record.updated_at = updated_at
    record.created_timestamp = created_timestamp
    record.updated_timestamp = updated_timestamp
    return record
