#!/usr/bin/python
# -*- coding: utf-8 -*-

# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

DOCUMENTATION = '''
---
module: influxdb2_organization
short_description: Manage InfluxDB 2 / InfluxDB Cloud organizations
version_added: "1.0.0"
description:
  - Create, update, delete or import InfluxDB organizations
  - An organization is tracked by its C(id); pass the id returned by a
    previous run to keep managing the same organization
  - Organization names are unique, creating a name that already exists
    fails and the existing organization must be imported instead

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
      - Required when I(state=present)
    type: str
  description:
    description:
      - Description of the organization
    type: str
  id:
    description:
      - ID of an organization already tracked by a previous run
      - Required when I(state) is C(absent) or C(imported)
    type: str
  state:
    description:
      - C(present) creates the organization, or updates the tracked one
      - C(absent) deletes the tracked organization
      - C(imported) reads an existing organization by I(id) without changing it
    type: str
    choices: ['present', 'absent', 'imported']
    default: present
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

notes:
  - When the tracked organization no longer exists on the server, I(state=present)
    creates it again and I(state=absent) reports no change
'''

EXAMPLES = '''
- name: Create an organization
  influxdata.influxdb2.influxdb2_organization:
    url: "https://us-east-1-1.aws.cloud2.influxdata.com"
    token: "{{ influxdb_token }}"
    name: "analytics"
    description: "Analytics team"
  register: org

- name: Rename the tracked organization
  influxdata.influxdb2.influxdb2_organization:
    token: "{{ influxdb_token }}"
    id: "{{ org.organization.id }}"
    name: "analytics-eu"
    description: "Analytics team (EU)"

- name: Import an organization created outside of Ansible
  influxdata.influxdb2.influxdb2_organization:
    token: "{{ influxdb_token }}"
    id: "0a1b2c3d4e5f6a7b"
    state: imported

- name: Delete the tracked organization
  influxdata.influxdb2.influxdb2_organization:
    token: "{{ influxdb_token }}"
    id: "{{ org.organization.id }}"
    state: absent
'''

RETURN = '''
organization:
  description: The tracked organization; C(id) is empty once it is no longer tracked
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

changed:
  description: Whether the organization was changed
  returned: always
  type: bool
  sample: true

operation:
  description: The operation that was performed
  returned: always
  type: str
  sample: "created"

msg:
  description: Human-readable message describing the action performed
  returned: always
  type: str
  sample: "Organization 'analytics' created successfully"
'''

from typing import Dict, Any, List

from ansible.module_utils.basic import AnsibleModule

try:
    from ansible_collections.influxdata.influxdb2.plugins.module_utils.influxdb2_base import (
        InfluxDB2Base,
        InfluxDB2NotFoundError,
        InfluxDB2OperationError,
        organization_argument_spec
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
        InfluxDB2NotFoundError,
        InfluxDB2OperationError,
        organization_argument_spec
    )
    from influxdb2_record import (
        OrganizationRecord,
        set_organization_resource_data
    )


class InfluxDB2Organization(InfluxDB2Base):
    """InfluxDB organization management"""

    def run(self):
        """Main execution method"""
        state = self.module.params['state']

        try:
            if state == 'present':
                result = self._ensure_present()
            elif state == 'absent':
                result = self._ensure_absent()
            else:
                result = self._ensure_imported()

            self.exit_json(**result)

        except Exception as e:
            self._handle_influxdb_exception(e, f"organization {state}")

    def _ensure_present(self) -> Dict[str, Any]:
        """Ensure the organization exists with the desired name and description"""
        desired = OrganizationRecord.from_params(self.module.params)

        if desired.id:
            record = self.read(OrganizationRecord(id=desired.id))
            if record.id:
                if not self._needs_update(record, desired):
                    return {
                        'organization': record.to_dict(),
                        'operation': 'none',
                        'msg': f"Organization '{record.name}' already in desired state"
                    }
                record.name = desired.name
                record.description = desired.description
                record = self.update(record)
                if record.id:
                    self.changed = True
                    return {
                        'organization': record.to_dict(),
                        'operation': 'updated',
                        'msg': f"Organization '{record.name}' updated successfully"
                    }

        record = self.create(OrganizationRecord(name=desired.name, description=desired.description))
        self.changed = True
        return {
            'organization': record.to_dict(),
            'operation': 'created',
            'msg': f"Organization '{record.name}' created successfully"
        }

    def _ensure_absent(self) -> Dict[str, Any]:
        """Ensure the tracked organization does not exist"""
        record = OrganizationRecord(id=self.module.params['id'])
        deleted = self.delete(record)
        self.changed = deleted
        record.clear()

        return {
            'organization': record.to_dict(),
            'operation': 'deleted' if deleted else 'none',
            'msg': (f"Organization '{self.module.params['id']}' deleted successfully" if deleted
                    else f"Organization '{self.module.params['id']}' already absent")
        }

    def _ensure_imported(self) -> Dict[str, Any]:
        """Import an existing organization by id"""
        records = self.import_state(self.module.params['id'])
        record = records[0]

        return {
            'organization': record.to_dict(),
            'operation': 'imported',
            'msg': f"Organization '{record.name}' imported successfully"
        }

    @staticmethod
    def _needs_update(current: OrganizationRecord, desired: OrganizationRecord) -> bool:
        if desired.name != current.name:
            return True
        return (desired.description or '') != (current.description or '')

    def create(self, record: OrganizationRecord) -> OrganizationRecord:
        """Create a new organization after checking that its name is free"""
        name = record.name

        try:
            self.organizations.find_organization_by_name(name)
        except InfluxDB2NotFoundError:
            self.module.log(f"Organization ({name}) not found, proceeding with create")
        except Exception as e:
            raise InfluxDB2OperationError(
                f"unable to check for presence of an existing Organization ({name}): {str(e)}"
            ) from e
        else:
            raise InfluxDB2OperationError(
                f"unable to create Organization ({name}) - an Organization with this name "
                f"already exists; import it with state=imported and its id to manage it"
            )

        self.module.log(f"Creating Organization ({name})")
        try:
            created = self.organizations.create_organization(name, record.description or '')
        except Exception as e:
            raise InfluxDB2OperationError(f"unable to create Organization ({name}): {str(e)}") from e

        if created is None or created.id is None:
            raise InfluxDB2OperationError(f"unable to create Organization ({name}): <unknown error occurred>")

        record.id = created.id
        self.module.log(f"Created Organization ({name}) ({record.id})")

        try:
            organization = self.organizations.find_organization_by_id(record.id)
        except Exception as e:
            raise InfluxDB2OperationError(
                f"unable to retrieve Organization ({name}) ({record.id}): {str(e)}"
            ) from e

        return set_organization_resource_data(record, organization)

    def read(self, record: OrganizationRecord) -> OrganizationRecord:
        """Refresh the record; a vanished organization clears its id"""
        org_id = record.id
        self.module.log(f"Reading Organization ({org_id})")

        try:
            organization = self.organizations.find_organization_by_id(org_id)
        except InfluxDB2NotFoundError:
            self.module.warn(f"Organization ({org_id}) not found, removing from state")
            record.clear()
            return record
        except Exception as e:
            raise InfluxDB2OperationError(f"unable to retrieve Organization ({org_id}): {str(e)}") from e

        return set_organization_resource_data(record, organization)

    def update(self, record: OrganizationRecord) -> OrganizationRecord:
        """Push the record's name and description to the tracked organization"""
        org_id = record.id
        self.module.log(f"Reading Organization ({org_id})")

        try:
            organization = self.organizations.find_organization_by_id(org_id)
        except InfluxDB2NotFoundError:
            self.module.warn(f"Organization ({org_id}) not found, removing from state")
            record.clear()
            return record
        except Exception as e:
            raise InfluxDB2OperationError(f"unable to retrieve Organization ({org_id}): {str(e)}") from e

        organization.name = record.name
        organization.description = record.description or ''

        self.module.log(f"Updating Organization ({org_id})")
        try:
            updated = self.organizations.update_organization(organization)
        except Exception as e:
            raise InfluxDB2OperationError(f"unable to update Organization ({org_id}): {str(e)}") from e

        self.module.log(f"Updated Organization ({org_id})")
        return set_organization_resource_data(record, updated)

    def delete(self, record: OrganizationRecord) -> bool:
        """Delete the tracked organization; returns False when it was already gone"""
        org_id = record.id
        self.module.log(f"Deleting Organization ({org_id})")

        try:
            self.organizations.delete_organization(org_id)
        except InfluxDB2NotFoundError:
            self.module.warn(f"Organization ({org_id}) not found, so no action was taken")
            return False
        except Exception as e:
            raise InfluxDB2OperationError(f"unable to delete Organization ({org_id}): {str(e)}") from e

        self.module.log(f"Organization ({org_id}) deleted, removing from state")
        return True

    def import_state(self, org_id: str) -> List[OrganizationRecord]:
        """Build the single record for an organization not tracked yet"""
        try:
            organization = self.organizations.find_organization_by_id(org_id)
        except Exception as e:
            raise InfluxDB2OperationError(f"unable to import Organization ({org_id}) : {str(e)}") from e

        record = set_organization_resource_data(OrganizationRecord(), organization)
        record.id = org_id
        return [record]


def main():
    """Main function"""
    # Define argument specification
    argument_spec = organization_argument_spec()
    argument_spec.update(dict(
        state=dict(type='str', choices=['present', 'absent', 'imported'], default='present')
    ))

    # Create module
    module = AnsibleModule(
        argument_spec=argument_spec,
        required_if=[
            ('state', 'present', ['name']),
            ('state', 'absent', ['id']),
            ('state', 'imported', ['id'])
        ],
        supports_check_mode=False
    )

    # Create and run organization manager
    organization_manager = InfluxDB2Organization(module)
    organization_manager.run()


if __name__ == '__main__':
    main()
