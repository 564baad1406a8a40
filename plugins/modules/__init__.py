#!/usr/bin/python
# -*- coding: utf-8 -*-

# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

"""
InfluxDB 2 Ansible Collection Modules

This package contains Ansible modules for managing InfluxDB 2 and
InfluxDB Cloud organizations.

Available modules:
- influxdb2_organization: Manage organizations (create, update, delete, import)
- influxdb2_organization_info: Look up an organization by name or id
"""

__version__ = '1.0.0'
__author__ = 'Ansible InfluxDB Collection'
