#!/usr/bin/python
# -*- coding: utf-8 -*-

# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

DOCUMENTATION = '''
---
module: influxdb2_organization_info
short_description: Look up an InfluxDB 2 / InfluxDB Cloud organization
version_added: "1.0.0"
description:
  - Retrieve one existing organization by name or by id
  - Never changes anything on the server

options:
  url:
    description:
      - URL of the InfluxDB instance
      - Can also be set via INFLUXDB_URL environment variable
    type: str
    default: http://localhost:8086
  token:
    description:
      - InfluxDB API token
      - Can also be set via INFLUXDB_TOKEN environment variable
    type: str
    required: true
  name:
    description:
      - Name of the organization
      - Takes priority over I(id) when both are given
    type: str
  id:
    description:
      - ID of the organization
    type: str
  validate_certs:
    description:
      - Whether to validate SSL certificates
    type: bool
    default: true
  timeout:
    description:
      - HTTP request timeout in milliseconds
    type: int
    default: 10000

requirements:
  - python >= 3.8
  - influxdb-client

author:
  - Ansible InfluxDB Collection (@ansible-collections)
'''

EXAMPLES = '''
- name: Look up an organization by name
  influxdata.influxdb2.influxdb2_organization_info:
    token: "{{ influxdb_token }}"
    name: "analytics"
  register: org_info

- name: Look up an organization by id
  influxdata.influxdb2.influxdb2_organization_info:
    token: "{{ influxdb_token }}"
    id: "0a1b2c3d4e5f6a7b"
  register: org_by_id

- name: Show organization details
  debug:
    msg: |
      Organization: {{ org_info.organization.name }} ({{ org_info.organization.id }})
      Description: {{ org_info.organization.description }}
'''

RETURN = '''
organization:
  description: Information about the requested organization
  returned: always
  type: dict
  sample:
    id: "0a1b2c3d4e5f6a7b"
    name: "analytics"
    description: "Analytics team"
    created_at: "2025-01-01T00:00:00+00:00"
    updated_at: "2025-01-01T00:00:00+00:00"
    created_timestamp: 1735689600
    updated_timestamp: 1735689600

msg:
  description: Human-readable message describing the action performed
  returned: always
  type: str
  sample: "Retrieved information for organization 'analytics'"
'''

from ansible.module_utils.basic import AnsibleModule

try:
    from ansible_collections.influxdata.influxdb2.plugins.module_utils.influxdb2_base import (
        InfluxDB2Base,
        InfluxDB2OperationError,
        InfluxDB2ValidationError,
        influxdb2_argument_spec
    )
    from ansible_collections.influxdata.influxdb2.plugins.module_utils.influxdb2_record import (
        OrganizationRecord,
        set_organization_resource_data
    )
except ImportError:
    # Fallback for development
    import sys
    import os
    sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'module_utils'))
    from influxdb2_base import (
        InfluxDB2Base,
        InfluxDB2OperationError,
        InfluxDB2ValidationError,
        influxdb2_argument_spec
    )
    from influxdb2_record import (
        OrganizationRecord,
        set_organization_resource_data
    )


class InfluxDB2OrganizationInfo(InfluxDB2Base):
    """InfluxDB organization lookup"""

    def run(self):
        """Main execution method"""
        try:
            record = self.read(
                name=self.module.params.get('name'),
                org_id=self.module.params.get('id')
            )

            self.exit_json(
                organization=record.to_dict(),
                msg=f"Retrieved information for organization '{record.name}'"
            )

        except Exception as e:
            self._handle_influxdb_exception(e, "organization info retrieval")

    def read(self, name: str = None, org_id: str = None) -> OrganizationRecord:
        """Look up one organization, by name when given, otherwise by id"""
        if name:
            try:
                organization = self.organizations.find_organization_by_name(name)
            except Exception as e:
                raise InfluxDB2OperationError(f"Can't find Organization with name: {name}: {str(e)}") from e
        elif org_id:
            try:
                organization = self.organizations.find_organization_by_id(org_id)
            except Exception as e:
                raise InfluxDB2OperationError(f"Can't find Organization with id: {org_id}: {str(e)}") from e
        else:
            raise InfluxDB2ValidationError("one of name or id is required")

        if organization is None or organization.id is None:
            raise InfluxDB2OperationError("Organization not found")

        return set_organization_resource_data(OrganizationRecord(), organization)


def main():
    """Main function"""
    # Define argument specification
    argument_spec = influxdb2_argument_spec()
    argument_spec.update(dict(
        name=dict(type='str'),
        id=dict(type='str')
    ))

    # Create module
    module = AnsibleModule(
        argument_spec=argument_spec,
        required_one_of=[('name', 'id')],
        supports_check_mode=True
    )

    # Create and run organization info manager
    info_manager = InfluxDB2OrganizationInfo(module)
    info_manager.run()


if __name__ == '__main__':
    main()
