#!/usr/bin/python
# -*- coding: utf-8 -*-

# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

"""
InfluxDB 2 Ansible Collection Module Utils

This package provides the shared client adapter, errors and organization
record used by the InfluxDB organization modules.
"""

__version__ = '1.0.0'
__author__ = 'Ansible InfluxDB Collection'

# Export main classes for easier imports
try:
    from .influxdb2_base import (
        InfluxDB2Base,
        InfluxDB2BaseError,
        InfluxDB2AuthError,
        InfluxDB2ValidationError,
        InfluxDB2OperationError,
        InfluxDB2NotFoundError,
        OrganizationsClient,
        influxdb2_argument_spec,
        organization_argument_spec
    )
    from .influxdb2_record import (
        OrganizationRecord,
        set_organization_resource_data
    )

    __all__ = [
        'InfluxDB2Base',
        'InfluxDB2BaseError',
        'InfluxDB2AuthError',
        'InfluxDB2ValidationError',
        'InfluxDB2OperationError',
        'InfluxDB2NotFoundError',
        'OrganizationsClient',
        'influxdb2_argument_spec',
        'organization_argument_spec',
        'OrganizationRecord',
        'set_organization_resource_data'
    ]

except ImportError:
    # Handle cases where ansible is not available
    __all__ = []
