#!/usr/bin/env python3
"""
Tests for the influxdb2_organization module handlers and lifecycle.
"""

import sys
import os
import unittest
from datetime import datetime, timezone
from unittest.mock import Mock

# Add the plugins directories to the path
sys.path.insert(0, os.path.dirname(__file__))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'plugins', 'module_utils'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'plugins', 'modules'))

from influxdb_client.rest import ApiException

from fake_influxdb import FakeOrganizationsApi, fake_client, mock_module
from influxdb2_base import InfluxDB2OperationError
from influxdb2_record import OrganizationRecord
from influxdb2_organization import InfluxDB2Organization


class OrganizationTestCase(unittest.TestCase):

    def setUp(self):
        self.api = FakeOrganizationsApi()
        self.module = mock_module(state='present', name=None, description=None, id=None)
        self.manager = InfluxDB2Organization(self.module, client=fake_client(self.api))


class TestCreate(OrganizationTestCase):

    def test_create_then_read_returns_name_and_description(self):
        record = self.manager.create(OrganizationRecord(name='analytics', description='Analytics team'))

        self.assertTrue(record.id)
        reread = self.manager.read(OrganizationRecord(id=record.id))
        self.assertEqual(reread.name, 'analytics')
        self.assertEqual(reread.description, 'Analytics team')

    def test_create_refetches_server_timestamps(self):
        record = self.manager.create(OrganizationRecord(name='analytics'))

        self.assertEqual(
            self.api.call_names(),
            ['find_organizations', 'create_organization', 'find_organization']
        )
        self.assertIsNotNone(record.created_at)
        self.assertIsNotNone(record.created_timestamp)

    def test_create_existing_name_fails_without_create_call(self):
        self.api.add('analytics')

        with self.assertRaises(InfluxDB2OperationError) as ctx:
            self.manager.create(OrganizationRecord(name='analytics'))

        self.assertIn('already exists', str(ctx.exception))
        self.assertNotIn('create_organization', self.api.call_names())

    def test_create_aborts_when_presence_check_fails(self):
        self.api.find_organizations = Mock(side_effect=ApiException(status=500, reason='Internal Server Error'))

        with self.assertRaises(InfluxDB2OperationError) as ctx:
            self.manager.create(OrganizationRecord(name='analytics'))

        self.assertIn('unable to check for presence', str(ctx.exception))
        self.assertNotIn('create_organization', self.api.call_names())

    def test_create_without_returned_id_is_unknown_error(self):
        self.api.create_organization = Mock(return_value=Mock(id=None))
        record = OrganizationRecord(name='analytics')

        with self.assertRaises(InfluxDB2OperationError) as ctx:
            self.manager.create(record)

        self.assertIn('<unknown error occurred>', str(ctx.exception))
        self.assertEqual(record.id, '')


class TestRead(OrganizationTestCase):

    def test_read_missing_id_clears_identity(self):
        record = self.manager.read(OrganizationRecord(id='deadbeef'))

        self.assertEqual(record.id, '')
        self.module.warn.assert_called_once()

    def test_read_other_error_is_fatal(self):
        self.api.find_organization = Mock(side_effect=ApiException(status=500, reason='Internal Server Error'))

        with self.assertRaises(InfluxDB2OperationError) as ctx:
            self.manager.read(OrganizationRecord(id='deadbeef'))

        self.assertIn('unable to retrieve Organization (deadbeef)', str(ctx.exception))

    def test_timestamps_match_their_string_form(self):
        org_id = self.api.add('analytics')

        record = self.manager.read(OrganizationRecord(id=org_id))

        created = datetime.fromisoformat(record.created_at)
        updated = datetime.fromisoformat(record.updated_at)
        self.assertEqual(record.created_timestamp, int(created.timestamp()))
        self.assertEqual(record.updated_timestamp, int(updated.timestamp()))
        self.assertEqual(created.tzinfo, timezone.utc)


class TestUpdate(OrganizationTestCase):

    def test_update_then_read_reflects_new_values(self):
        org_id = self.api.add('analytics', 'old')

        self.manager.update(OrganizationRecord(id=org_id, name='analytics-eu', description='new'))
        record = self.manager.read(OrganizationRecord(id=org_id))

        self.assertEqual(record.name, 'analytics-eu')
        self.assertEqual(record.description, 'new')

    def test_update_missing_id_clears_identity(self):
        record = self.manager.update(OrganizationRecord(id='deadbeef', name='x'))

        self.assertEqual(record.id, '')
        self.assertNotIn('update_organization', self.api.call_names())

    def test_update_failure_is_fatal(self):
        org_id = self.api.add('analytics')
        self.api.update_organization = Mock(side_effect=ApiException(status=422, reason='Unprocessable Entity'))

        with self.assertRaises(InfluxDB2OperationError) as ctx:
            self.manager.update(OrganizationRecord(id=org_id, name='x'))

        self.assertIn(f'unable to update Organization ({org_id})', str(ctx.exception))


class TestDelete(OrganizationTestCase):

    def test_delete_existing(self):
        org_id = self.api.add('analytics')

        self.assertTrue(self.manager.delete(OrganizationRecord(id=org_id)))
        self.assertNotIn(org_id, self.api.organizations)

    def test_delete_missing_is_not_an_error(self):
        self.assertFalse(self.manager.delete(OrganizationRecord(id='deadbeef')))

    def test_delete_other_error_is_fatal(self):
        self.api.delete_organization = Mock(side_effect=ApiException(status=500, reason='Internal Server Error'))

        with self.assertRaises(InfluxDB2OperationError):
            self.manager.delete(OrganizationRecord(id='deadbeef'))


class TestImport(OrganizationTestCase):

    def test_import_matches_direct_read(self):
        org_id = self.api.add('analytics', 'Analytics team')

        records = self.manager.import_state(org_id)
        direct = self.manager.read(OrganizationRecord(id=org_id))

        self.assertEqual(len(records), 1)
        self.assertEqual(records[0], direct)

    def test_import_missing_is_fatal(self):
        with self.assertRaises(InfluxDB2OperationError) as ctx:
            self.manager.import_state('deadbeef')

        self.assertIn('unable to import Organization (deadbeef)', str(ctx.exception))


class TestLifecycle(unittest.TestCase):
    """The module's state handling on top of the handlers"""

    def _run(self, api, **params):
        module = mock_module(**params)
        InfluxDB2Organization(module, client=fake_client(api)).run()
        return module

    def _result(self, module):
        module.fail_json.assert_not_called()
        return module.exit_json.call_args[1]

    def test_present_without_id_creates(self):
        api = FakeOrganizationsApi()

        result = self._result(self._run(api, state='present', name='analytics', description='d', id=None))

        self.assertTrue(result['changed'])
        self.assertEqual(result['operation'], 'created')
        self.assertEqual(result['organization']['name'], 'analytics')
        self.assertIn(result['organization']['id'], api.organizations)

    def test_present_with_id_in_desired_state_is_unchanged(self):
        api = FakeOrganizationsApi()
        org_id = api.add('analytics', 'd')

        result = self._result(self._run(api, state='present', name='analytics', description='d', id=org_id))

        self.assertFalse(result['changed'])
        self.assertEqual(result['operation'], 'none')
        self.assertNotIn('update_organization', api.call_names())

    def test_present_with_id_updates_changed_fields(self):
        api = FakeOrganizationsApi()
        org_id = api.add('analytics', 'd')

        result = self._result(self._run(api, state='present', name='analytics', description='new', id=org_id))

        self.assertTrue(result['changed'])
        self.assertEqual(result['operation'], 'updated')
        self.assertEqual(api.organizations[org_id].description, 'new')

    def test_present_with_vanished_id_recreates(self):
        api = FakeOrganizationsApi()

        result = self._result(self._run(api, state='present', name='analytics', description=None, id='deadbeef'))

        self.assertEqual(result['operation'], 'created')
        self.assertNotEqual(result['organization']['id'], 'deadbeef')

    def test_absent_deletes(self):
        api = FakeOrganizationsApi()
        org_id = api.add('analytics')

        result = self._result(self._run(api, state='absent', name=None, description=None, id=org_id))

        self.assertTrue(result['changed'])
        self.assertEqual(result['operation'], 'deleted')
        self.assertEqual(result['organization']['id'], '')

    def test_absent_when_already_gone_is_unchanged(self):
        result = self._result(
            self._run(FakeOrganizationsApi(), state='absent', name=None, description=None, id='deadbeef')
        )

        self.assertFalse(result['changed'])
        self.assertEqual(result['operation'], 'none')

    def test_imported(self):
        api = FakeOrganizationsApi()
        org_id = api.add('analytics', 'd')

        result = self._result(self._run(api, state='imported', name=None, description=None, id=org_id))

        self.assertFalse(result['changed'])
        self.assertEqual(result['operation'], 'imported')
        self.assertEqual(result['organization']['id'], org_id)

    def test_existing_name_fails_the_module(self):
        api = FakeOrganizationsApi()
        api.add('analytics')

        module = self._run(api, state='present', name='analytics', description=None, id=None)

        module.exit_json.assert_not_called()
        self.assertIn('already exists', module.fail_json.call_args[1]['msg'])

    def test_unauthorized_maps_to_auth_message(self):
        api = FakeOrganizationsApi()
        api.find_organization = Mock(side_effect=ApiException(status=401, reason='Unauthorized'))

        module = self._run(api, state='imported', name=None, description=None, id='deadbeef')

        self.assertEqual(
            module.fail_json.call_args[1]['msg'],
            "Authentication failed during organization imported"
        )


if __name__ == '__main__':
    unittest.main()
