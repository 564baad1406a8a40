#!/usr/bin/python
# -*- coding: utf-8 -*-

# Copyright: (c) 2025, Ansible Project
# GNU General Public License v3.0+ (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)

import json
import traceback
from typing import Dict, Any, Optional

try:
    from influxdb_client import InfluxDBClient
    from influxdb_client.domain.organization import Organization
    from influxdb_client.rest import ApiException
    HAS_INFLUXDB_CLIENT = True
except ImportError:
    HAS_INFLUXDB_CLIENT = False
    InfluxDBClient = None
    Organization = None
    ApiException = None

from ansible.module_utils.basic import AnsibleModule, env_fallback, missing_required_lib


class InfluxDB2BaseError(Exception):
    """Base exception for InfluxDB operations"""
    pass


class InfluxDB2AuthError(InfluxDB2BaseError):
    """Authentication related errors"""
    pass


class InfluxDB2ValidationError(InfluxDB2BaseError):
    """Validation related errors"""
    pass


class InfluxDB2OperationError(InfluxDB2BaseError):
    """Operation related errors"""
    pass


class InfluxDB2NotFoundError(InfluxDB2BaseError):
    """The requested entity does not exist on the server"""
    pass


def _api_error_code(e) -> Optional[str]:
    """Extract the InfluxDB error code from an ApiException body, if any"""
    body = getattr(e, 'body', None)
    if not body:
        return None
    if isinstance(body, bytes):
        body = body.decode('utf-8', errors='replace')
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if isinstance(payload, dict):
        return payload.get('code')
    return None


def is_not_found(e: Exception) -> bool:
    """Whether an API exception means the entity does not exist"""
    if isinstance(e, InfluxDB2NotFoundError):
        return True
    if ApiException is None or not isinstance(e, ApiException):
        return False
    return e.status == 404 or _api_error_code(e) == 'not found'


class OrganizationsClient:
    """
    Organization calls against the InfluxDB API.

    Not-found answers are raised as InfluxDB2NotFoundError, every other
    ApiException propagates unchanged.
    """

    def __init__(self, organizations_api):
        self._api = organizations_api

    def find_organization_by_name(self, name: str):
        try:
            orgs = self._api.find_organizations(org=name)
        except Exception as e:
            if is_not_found(e):
                raise InfluxDB2NotFoundError(f"organization '{name}' not found") from e
            raise
        if not orgs:
            raise InfluxDB2NotFoundError(f"organization '{name}' not found")
        return orgs[0]

    def find_organization_by_id(self, org_id: str):
        try:
            return self._api.find_organization(org_id)
        except Exception as e:
            if is_not_found(e):
                raise InfluxDB2NotFoundError(f"organization '{org_id}' not found") from e
            raise

    def create_organization(self, name: str, description: Optional[str] = None):
        organization = Organization(name=name, description=description)
        return self._api.create_organization(organization=organization)

    def update_organization(self, organization):
        try:
            return self._api.update_organization(organization)
        except Exception as e:
            if is_not_found(e):
                raise InfluxDB2NotFoundError(f"organization '{organization.id}' not found") from e
            raise

    def delete_organization(self, org_id: str):
        try:
            self._api.delete_organization(org_id)
        except Exception as e:
            if is_not_found(e):
                raise InfluxDB2NotFoundError(f"organization '{org_id}' not found") from e
            raise


class InfluxDB2Base:
    """Base class for InfluxDB 2 / InfluxDB Cloud operations"""

    def __init__(self, module: AnsibleModule, client=None):
        self.module = module
        self.changed = False
        self.client = client

        # Check if influxdb-client is available
        if not HAS_INFLUXDB_CLIENT:
            self.module.fail_json(
                msg=missing_required_lib("influxdb-client"),
                exception=traceback.format_exc()
            )

        if self.client is None:
            self._init_client()

        self.organizations = OrganizationsClient(self.client.organizations_api())

    def _init_client(self):
        """Initialize InfluxDB client from the connection options"""
        token = self.module.params.get('token')
        url = self.module.params.get('url') or 'http://localhost:8086'

        if not token:
            self.module.fail_json(msg="InfluxDB API token is required")

        try:
            self.client = InfluxDBClient(
                url=url,
                token=token,
                verify_ssl=self.module.params.get('validate_certs', True),
                timeout=self.module.params.get('timeout', 10000)
            )
        except Exception as e:
            self.module.fail_json(
                msg=f"Failed to initialize InfluxDB client: {str(e)}",
                exception=traceback.format_exc()
            )

    def _handle_influxdb_exception(self, e: Exception, operation: str):
        """Handle API exceptions and convert to appropriate error messages"""
        cause = e.__cause__ if e.__cause__ is not None else e
        status = getattr(cause, 'status', None)

        if status == 401 or isinstance(e, InfluxDB2AuthError):
            self.module.fail_json(msg=f"Authentication failed during {operation}")
        elif status == 403:
            self.module.fail_json(msg=f"Insufficient permissions for {operation}")
        elif isinstance(e, InfluxDB2BaseError):
            self.module.fail_json(msg=f"Error during {operation}: {str(e)}")
        else:
            self.module.fail_json(
                msg=f"Unexpected error during {operation}: {str(e)}",
                exception=traceback.format_exc()
            )

    def exit_json(self, **kwargs):
        """Exit with JSON response"""
        kwargs['changed'] = self.changed
        self.module.exit_json(**kwargs)

    def fail_json(self, **kwargs):
        """Exit with failure"""
        self.module.fail_json(**kwargs)


def influxdb2_argument_spec() -> Dict[str, Any]:
    """Common argument specifications for InfluxDB modules"""
    return dict(
        url=dict(
            type='str',
            default='http://localhost:8086',
            fallback=(env_fallback, ['INFLUXDB_URL'])
        ),
        token=dict(
            type='str',
            required=True,
            no_log=True,
            fallback=(env_fallback, ['INFLUXDB_TOKEN'])
        ),
        validate_certs=dict(type='bool', default=True),
        timeout=dict(type='int', default=10000)
    )


def organization_argument_spec() -> Dict[str, Any]:
    """Argument specifications specific to organization operations"""
    spec = influxdb2_argument_spec()
    spec.update(dict(
        name=dict(type='str'),
        description=dict(type='str'),
        id=dict(type='str')
    ))
    return spec
