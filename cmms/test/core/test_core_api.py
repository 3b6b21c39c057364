"""
Tests for the asset and work order endpoints
"""


def test_asset_crud(admin_client):
    response = admin_client.post('/api/assets', json={'name': 'Boiler B-1', 'location': 'Plant room'})
    assert response.status_code == 201
    asset = response.get_json()
    assert asset['status'] == 'OPERATIONAL'
    assert asset['created_by_id'] is not None

    response = admin_client.patch(f"/api/assets/{asset['id']}", json={'description': 'Gas fired', 'last_maintenance': '2024-03-01'})
    assert response.status_code == 200
    assert response.get_json()['description'] == 'Gas fired'
    assert response.get_json()['last_maintenance'] == '2024-03-01'
    assert response.get_json()['name'] == 'Boiler B-1', "PATCH leaves absent fields alone"

    response = admin_client.get('/api/assets?location=plant')
    assert [a['name'] for a in response.get_json()] == ['Boiler B-1']

    assert admin_client.delete(f"/api/assets/{asset['id']}").status_code == 200
    assert admin_client.get(f"/api/assets/{asset['id']}").status_code == 404


def test_asset_validation(admin_client):
    response = admin_client.post('/api/assets', json={'name': '  ', 'status': 'BROKEN'})
    assert response.status_code == 400
    errors = response.get_json()['errors']
    assert errors['name'] == ['Must not be empty']
    assert 'status' in errors


def test_asset_permissions(technician_client, manager_client, make_asset):
    asset_id = make_asset()

    assert technician_client.post('/api/assets', json={'name': 'X'}).status_code == 403
    assert technician_client.patch(f'/api/assets/{asset_id}', json={'name': 'X'}).status_code == 403
    assert manager_client.delete(f'/api/assets/{asset_id}').status_code == 403
    assert manager_client.patch(f'/api/assets/{asset_id}', json={'name': 'Pump P-1b'}).status_code == 200


def test_technician_can_change_asset_status(technician_client, make_asset):
    asset_id = make_asset()

    response = technician_client.patch(f'/api/assets/{asset_id}/status', json={'status': 'maintenance'})
    assert response.status_code == 200
    assert response.get_json()['status'] == 'MAINTENANCE'

    response = technician_client.patch(f'/api/assets/{asset_id}/status', json={'status': 'SCRAPPED'})
    assert response.status_code == 400

    response = technician_client.get('/api/assets?status=maintenance')
    assert [a['id'] for a in response.get_json()] == [asset_id]


def test_deleting_asset_removes_its_schedules(admin_client, make_asset, make_schedule):
    asset_id = make_asset()
    make_schedule(asset_id=asset_id)

    assert admin_client.delete(f'/api/assets/{asset_id}').status_code == 200
    assert admin_client.get('/api/maintenance-schedules').get_json() == []


def test_work_order_lifecycle(technician_client, make_asset):
    asset_id = make_asset()

    response = technician_client.post('/api/work-orders', json={
        'title': 'Replace seal',
        'asset_id': asset_id,
        'priority': 'high',
        'due_date': '2024-03-20T12:00:00Z'
    })
    assert response.status_code == 201
    work_order = response.get_json()
    assert work_order['status'] == 'OPEN'
    assert work_order['priority'] == 'HIGH'
    assert work_order['due_date'] == '2024-03-20T12:00:00'
    assert work_order['completed_date'] is None

    response = technician_client.patch(f"/api/work-orders/{work_order['id']}", json={'status': 'COMPLETED'})
    assert response.status_code == 200
    assert response.get_json()['completed_date'] is not None

    response = technician_client.patch(f"/api/work-orders/{work_order['id']}", json={'status': 'IN_PROGRESS'})
    assert response.get_json()['completed_date'] is None, "Reopening clears the completion stamp"


def test_work_order_validation(technician_client):
    response = technician_client.post('/api/work-orders', json={'title': 'No due date', 'asset_id': 999})
    assert response.status_code == 400
    errors = response.get_json()['errors']
    assert errors == {'due_date': ['This field is required']}

    response = technician_client.post('/api/work-orders', json={
        'title': 'Ghost asset', 'asset_id': 999, 'due_date': '2024-03-20'
    })
    assert response.get_json()['errors'] == {'asset_id': ['Asset not found']}


def test_work_order_list_hides_archived(admin_client, make_work_order):
    make_work_order(title='Live')
    make_work_order(title='Old', status='ARCHIVED')

    assert [wo['title'] for wo in admin_client.get('/api/work-orders').get_json()] == ['Live']
    assert len(admin_client.get('/api/work-orders?include_archived=true').get_json()) == 2
    assert [wo['title'] for wo in admin_client.get('/api/work-orders?status=archived').get_json()] == ['Old']


def test_only_admin_deletes_work_orders(admin_client, technician_client, make_work_order):
    work_order_id = make_work_order()
    assert technician_client.delete(f'/api/work-orders/{work_order_id}').status_code == 403
    assert admin_client.delete(f'/api/work-orders/{work_order_id}').status_code == 200
