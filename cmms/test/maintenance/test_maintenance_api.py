"""
Tests for the maintenance schedule, completion, dashboard, calendar and analytics endpoints
"""

from datetime import date


def test_create_schedule_canonicalizes_frequency(manager_client, make_asset):
    asset_id = make_asset()

    response = manager_client.post('/api/maintenance-schedules', json={
        'title': 'Lubricate',
        'asset_id': asset_id,
        'start_date': '2024-01-01',
        'frequency': 'annually'
    })

    assert response.status_code == 201
    body = response.get_json()
    assert body['frequency'] == 'YEARLY'
    assert body['status'] == 'ACTIVE'
    assert body['end_date'] is None
    assert body['asset_name'] == 'Pump P-1'


def test_schedule_validation(manager_client, make_asset):
    asset_id = make_asset()

    response = manager_client.post('/api/maintenance-schedules', json={
        'title': 'Bad',
        'asset_id': asset_id,
        'start_date': '2024-03-01',
        'end_date': '2024-02-01',
        'frequency': 'HOURLY'
    })

    assert response.status_code == 400
    assert set(response.get_json()['errors']) == {'frequency'}

    response = manager_client.post('/api/maintenance-schedules', json={
        'title': 'Bad',
        'asset_id': asset_id,
        'start_date': '2024-03-01',
        'end_date': '2024-02-01',
        'frequency': 'MONTHLY'
    })
    assert response.get_json()['errors'] == {'end_date': ['End date must not be before start date']}


def test_schedule_patch_checks_end_against_stored_start(manager_client, make_schedule):
    schedule_id = make_schedule(start_date=date(2024, 3, 1))

    response = manager_client.patch(f'/api/maintenance-schedules/{schedule_id}', json={'end_date': '2024-02-01'})
    assert response.status_code == 400

    response = manager_client.patch(f'/api/maintenance-schedules/{schedule_id}', json={'end_date': '2024-12-31', 'frequency': 'weekly'})
    assert response.status_code == 200
    assert response.get_json()['end_date'] == '2024-12-31'
    assert response.get_json()['frequency'] == 'WEEKLY'


def test_technician_cannot_edit_schedules(technician_client, make_schedule):
    schedule_id = make_schedule()
    assert technician_client.patch(f'/api/maintenance-schedules/{schedule_id}', json={'title': 'x'}).status_code == 403
    assert technician_client.delete(f'/api/maintenance-schedules/{schedule_id}').status_code == 403
    assert technician_client.get(f'/api/maintenance-schedules/{schedule_id}').status_code == 200


def test_schedule_range_filter(technician_client, make_schedule):
    make_schedule(title='Current', start_date=date(2024, 1, 1))
    make_schedule(title='Finished', start_date=date(2023, 1, 1), end_date=date(2023, 6, 30))

    response = technician_client.get('/api/maintenance-schedules?start=2024-03-01&end=2024-03-31')
    assert [s['title'] for s in response.get_json()] == ['Current']

    response = technician_client.get('/api/maintenance-schedules?start=March')
    assert response.status_code == 400


def test_record_completion_hides_occurrence(technician_client, make_schedule):
    schedule_id = make_schedule(start_date=date(2024, 1, 1))

    tasks = technician_client.get('/api/dashboard/maintenance-tasks?as_of=2024-03-15').get_json()
    assert [t['date'] for t in tasks] == ['2024-01-01', '2024-02-01', '2024-03-01']

    response = technician_client.post('/api/maintenance-completions', json={
        'schedule_id': schedule_id,
        'completed_date': '2024-02-01T14:30:00',
        'notes': 'Replaced filter'
    })
    assert response.status_code == 201
    assert response.get_json()['created_by_id'] is not None

    tasks = technician_client.get('/api/dashboard/maintenance-tasks?as_of=2024-03-15').get_json()
    assert [t['date'] for t in tasks] == ['2024-01-01', '2024-03-01']

    schedule = technician_client.get(f'/api/maintenance-schedules/{schedule_id}').get_json()
    assert schedule['last_completed'] == '2024-02-01'

    completions = technician_client.get(f'/api/maintenance-completions?schedule_id={schedule_id}').get_json()
    assert [c['notes'] for c in completions] == ['Replaced filter']


def test_completion_validation(technician_client, make_schedule):
    schedule_id = make_schedule(start_date=date(2024, 1, 1))

    response = technician_client.post('/api/maintenance-completions', json={'schedule_id': 4242})
    assert response.get_json()['errors'] == {'schedule_id': ['Maintenance schedule not found']}

    response = technician_client.post('/api/maintenance-completions', json={
        'schedule_id': schedule_id, 'completed_date': '2023-12-01'
    })
    assert response.status_code == 400


def test_dashboard_tasks_shape_and_tabs(technician_client, make_asset, make_schedule):
    asset_id = make_asset('Compressor')
    make_schedule(asset_id=asset_id, title='Drain tank', start_date=date(2024, 3, 1), frequency='WEEKLY')

    tasks = technician_client.get('/api/dashboard/maintenance-tasks?as_of=2024-03-15&tab=all').get_json()
    assert tasks[0] == {
        'id': f"{tasks[0]['schedule_id']}-2024-03-01",
        'schedule_id': tasks[0]['schedule_id'],
        'title': 'Drain tank',
        'asset_id': asset_id,
        'asset_name': 'Compressor',
        'date': '2024-03-01',
        'is_overdue': True,
        'days_overdue': 14,
    }
    assert tasks[-1]['date'] == '2024-03-15'
    assert 'days_overdue' not in tasks[-1]

    overdue = technician_client.get('/api/dashboard/maintenance-tasks?as_of=2024-03-15&tab=overdue').get_json()
    assert [t['date'] for t in overdue] == ['2024-03-01', '2024-03-08']

    response = technician_client.get('/api/dashboard/maintenance-tasks?tab=later')
    assert response.status_code == 400
    response = technician_client.get('/api/dashboard/maintenance-tasks?strategy=random')
    assert response.status_code == 400


def test_dashboard_rolling_strategy(technician_client, make_schedule, make_completion):
    schedule_id = make_schedule(start_date=date(2024, 1, 1))
    make_completion(schedule_id, date(2024, 2, 20))

    tasks = technician_client.get('/api/dashboard/maintenance-tasks?as_of=2024-03-25&strategy=rolling').get_json()
    assert [t['date'] for t in tasks] == ['2024-03-20']


def test_dashboard_summary(technician_client, make_schedule, make_work_order):
    make_schedule(start_date=date(2024, 1, 1))
    make_work_order(status='IN_PROGRESS')

    summary = technician_client.get('/api/dashboard/summary?as_of=2024-03-15').get_json()
    assert summary['overdue'] == 3
    assert summary['due_today'] == 0
    assert summary['in_progress_work_orders'] == 1


def test_maintenance_calendar(technician_client, make_schedule):
    make_schedule(start_date=date(2024, 1, 31))

    body = technician_client.get('/api/maintenance-calendar?as_of=2024-03-15&start=2024-03-01&end=2024-05-31').get_json()
    assert body['start'] == '2024-03-01'
    assert body['end'] == '2024-05-31'
    assert [(o['date'], o['is_overdue']) for o in body['occurrences']] == [
        ('2024-03-31', False),
        ('2024-04-30', False),
        ('2024-05-31', False),
    ]

    body = technician_client.get('/api/maintenance-calendar?as_of=2024-03-15').get_json()
    assert (body['start'], body['end']) == ('2024-03-01', '2024-03-31')

    response = technician_client.get('/api/maintenance-calendar?start=2024-05-01&end=2024-04-01')
    assert response.status_code == 400


def test_maintenance_analytics(technician_client, make_schedule, make_completion):
    schedule_id = make_schedule()
    make_completion(schedule_id, date(2024, 3, 1))

    report = technician_client.get('/api/maintenance-analytics?as_of=2024-03-15&months=2').get_json()
    assert report['monthly_completions'] == [
        {'month': '2024-02', 'completions': 0},
        {'month': '2024-03', 'completions': 1},
    ]
    assert report['asset_status']['OPERATIONAL'] == 1

    assert technician_client.get('/api/maintenance-analytics?months=0').status_code == 400


def test_completion_with_utc_offset_keeps_the_local_day(technician_client, make_schedule):
    schedule_id = make_schedule(start_date=date(2024, 2, 1))

    response = technician_client.post('/api/maintenance-completions', json={
        'schedule_id': schedule_id,
        'completed_date': '2024-02-01T00:30:00+02:00'
    })
    assert response.status_code == 201, "Local Feb 1 is not before the Feb 1 start"
    assert response.get_json()['completed_date'] == '2024-02-01T00:30:00'

    tasks = technician_client.get('/api/dashboard/maintenance-tasks?as_of=2024-03-15').get_json()
    assert [t['date'] for t in tasks] == ['2024-03-01']

    schedule = technician_client.get(f'/api/maintenance-schedules/{schedule_id}').get_json()
    assert schedule['last_completed'] == '2024-02-01'
