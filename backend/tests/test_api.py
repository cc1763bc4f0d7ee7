import uuid


def _payload(**overrides):
    body = {
        "email": "grace@school.org",
        "password": "hopper",
        "full_name": "Grace Hopper",
        "phone": "555-0101",
        "date_of_birth": "1906-12-09",
        "joining_date": "",
        "gender": "female",
        "designation": "Rear Admiral",
    }
    body.update(overrides)
    return body


def test_health(client):
    r = client.get('/health')
    assert r.status_code == 200
    assert r.json() == {'status': 'ok'}


def test_register_and_fetch(client):
    r = client.post('/api/v1/teachers', json=_payload())
    assert r.status_code == 201
    created = r.json()
    assert 'password_hash' not in created
    assert 'password' not in created
    assert created['is_active'] is True
    assert created['date_of_birth'] == '1906-12-09'
    assert created['joining_date'] is None
    assert created['bio'] == ''
    assert r.headers.get('X-Request-ID')

    r2 = client.get(f"/api/v1/teachers/{created['id']}")
    assert r2.status_code == 200
    fetched = r2.json()
    for key in ('email', 'full_name', 'phone', 'gender', 'designation', 'date_of_birth', 'photo'):
        assert fetched[key] == created[key]


def test_register_validation_errors(client):
    assert client.post('/api/v1/teachers', json=_payload(password='abc')).status_code == 400
    assert client.post('/api/v1/teachers', json=_payload(email='not-an-email')).status_code == 400
    assert client.post('/api/v1/teachers', json=_payload(full_name='G')).status_code == 400
    assert client.post('/api/v1/teachers', json=_payload(gender='robot')).status_code == 400
    assert client.post('/api/v1/teachers', json=_payload(date_of_birth='09/12/1906')).status_code == 400
    bad_json = client.post(
        '/api/v1/teachers',
        content=b'{"email": ',
        headers={'Content-Type': 'application/json'},
    )
    assert bad_json.status_code == 400


def test_register_duplicate_email_conflict(client):
    assert client.post('/api/v1/teachers', json=_payload()).status_code == 201
    r = client.post('/api/v1/teachers', json=_payload(full_name='Someone Else'))
    assert r.status_code == 409
    assert len(client.get('/api/v1/teachers').json()) == 1


def test_list_teachers(client):
    r = client.get('/api/v1/teachers')
    assert r.status_code == 200
    assert r.json() == []
    client.post('/api/v1/teachers', json=_payload())
    client.post('/api/v1/teachers', json=_payload(email='ada@school.org', full_name='Ada Lovelace'))
    names = [t['full_name'] for t in client.get('/api/v1/teachers').json()]
    assert names == ['Ada Lovelace', 'Grace Hopper']


def test_get_bad_and_missing_ids(client):
    assert client.get('/api/v1/teachers/not-a-uuid').status_code == 400
    assert client.get(f'/api/v1/teachers/{uuid.uuid4()}').status_code == 404


def test_update_keeps_password_and_uses_path_id(client):
    created = client.post('/api/v1/teachers', json=_payload()).json()
    body = _payload(
        id=str(uuid.uuid4()),
        password='changed',
        password_hash='smuggled',
        phone='555-0202',
        bio='Wrote the first compiler',
    )
    r = client.put(f"/api/v1/teachers/{created['id']}", json=body)
    assert r.status_code == 200
    updated = r.json()
    assert updated['id'] == created['id']
    assert updated['phone'] == '555-0202'
    assert 'password_hash' not in updated

    login = client.post('/api/v1/teachers/authenticate', json={'email': 'grace@school.org', 'password': 'hopper'})
    assert login.status_code == 200
    assert login.json()['bio'] == 'Wrote the first compiler'


def test_update_missing_teacher(client):
    r = client.put(f'/api/v1/teachers/{uuid.uuid4()}', json=_payload())
    assert r.status_code == 404


def test_authenticate_failures_look_identical(client):
    client.post('/api/v1/teachers', json=_payload())
    wrong = client.post('/api/v1/teachers/authenticate', json={'email': 'grace@school.org', 'password': 'nope'})
    unknown = client.post('/api/v1/teachers/authenticate', json={'email': 'nobody@school.org', 'password': 'hopper'})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()


def test_change_password_and_delete(client):
    created = client.post('/api/v1/teachers', json=_payload()).json()
    tid = created['id']
    r = client.put(f'/api/v1/teachers/{tid}/password', json={'password': 'cobol'})
    assert r.status_code == 204
    assert client.post('/api/v1/teachers/authenticate', json={'email': 'grace@school.org', 'password': 'cobol'}).status_code == 200
    assert client.post('/api/v1/teachers/authenticate', json={'email': 'grace@school.org', 'password': 'hopper'}).status_code == 401

    assert client.delete(f'/api/v1/teachers/{tid}').status_code == 204
    assert client.get(f'/api/v1/teachers/{tid}').status_code == 404
    assert client.delete(f'/api/v1/teachers/{tid}').status_code == 404
    assert client.put(f'/api/v1/teachers/{tid}/password', json={'password': 'cobol'}).status_code == 404


def test_authenticate_with_mixed_case_domain_as_registered(client):
    r = client.post('/api/v1/teachers', json=_payload(email='grace@School.org'))
    assert r.status_code == 201
    login = client.post('/api/v1/teachers/authenticate', json={'email': 'grace@School.org', 'password': 'hopper'})
    assert login.status_code == 200
    assert login.json()['id'] == r.json()['id']


def test_absent_dates_read_back_as_null(client):
    created = client.post('/api/v1/teachers', json=_payload(date_of_birth='', joining_date='')).json()
    fetched = client.get(f"/api/v1/teachers/{created['id']}").json()
    assert fetched['date_of_birth'] is None
    assert fetched['joining_date'] is None
    assert fetched['bio'] == ''
    assert fetched['photo'] == ''
