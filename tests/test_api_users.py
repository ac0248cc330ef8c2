class TestUsersApi:

    def test_create_and_lookup(self, client):
        created = client.post("/api/users", json={"email": "layla@example.com", "name": "Layla"})
        assert created.status_code == 201
        user = created.json()

        assert client.get(f"/api/users/{user['id']}").json()["email"] == "layla@example.com"
        assert client.get("/api/users/email/layla@example.com").json()["id"] == user["id"]

    def test_duplicate_email(self, client):
        client.post("/api/users", json={"email": "layla@example.com"})
        response = client.post("/api/users", json={"email": "LAYLA@example.com"})
        assert response.status_code == 409

    def test_unknown_user(self, client):
        assert client.get("/api/users/missing").status_code == 404
        assert client.get("/api/users/email/nobody@example.com").status_code == 404


class TestFamilyGroupsApi:

    def test_create_join_and_list_members(self, client):
        user = client.post("/api/users", json={"email": "layla@example.com"}).json()
        group = client.post("/api/family-groups", json={"name": "Haddad Family", "createdBy": user["id"]}).json()

        assert len(group["inviteCode"]) == 6
        assert client.get(f"/api/family-groups/invite/{group['inviteCode']}").json()["id"] == group["id"]

        joined = client.post(f"/api/family-groups/{group['id']}/join", json={"userId": user["id"]})
        assert joined.status_code == 200

        members = client.get(f"/api/family-groups/{group['id']}/members").json()
        assert [m["email"] for m in members] == ["layla@example.com"]
        assert client.get(f"/api/users/{user['id']}").json()["familyGroupId"] == group["id"]

    def test_unknown_group_and_invite(self, client):
        assert client.get("/api/family-groups/missing").status_code == 404
        assert client.get("/api/family-groups/invite/NOPE00").status_code == 404

    def test_join_unknown_user(self, client):
        group = client.post("/api/family-groups", json={"name": "Haddad Family"}).json()
        response = client.post(f"/api/family-groups/{group['id']}/join", json={"userId": "missing"})
        assert response.status_code == 404


class TestIngredientsApi:

    def test_process(self, client):
        response = client.post("/api/ingredients/process", json={"ingredients": [
            {"name": "Flour", "amount": "1500 g"},
            {"name": "", "amount": "2"},
            {"name": "بصل", "amount": "2 حبة"},
        ]})

        assert response.status_code == 200
        assert response.json() == [
            {"name": "Flour", "amount": 1.5, "unit": "kg", "category": "grains", "display": "1.5 kg"},
            {"name": "بصل", "amount": 2.0, "unit": "piece", "category": "vegetables", "display": "2 piece"},
        ]

    def test_combine_grouped(self, client):
        response = client.post("/api/ingredients/combine", json={
            "lists": [
                [{"name": "Flour", "amount": "400 g"}, {"name": "Tomato", "amount": "2"}],
                [{"name": "flour", "amount": "700 g"}, {"name": "carrot", "amount": "3"}],
            ],
            "grouped": True,
        })

        groups = response.json()["groups"]
        assert list(groups) == ["grains", "vegetables"]
        assert groups["grains"][0]["display"] == "1.1 kg"
        assert [i["name"] for i in groups["vegetables"]] == ["carrot", "Tomato"]

    def test_combine_flat(self, client):
        response = client.post("/api/ingredients/combine", json={
            "lists": [[{"name": "Milk", "amount": "600 ml"}], [{"name": "milk", "amount": "600 مل"}]],
        })

        assert response.json() == [
            {"name": "Milk", "amount": 1.2, "unit": "liter", "category": "dairy", "display": "1.2 liter"},
        ]

    def test_process_long_numeral(self, client):
        response = client.post("/api/ingredients/process", json={"ingredients": [
            {"name": "Flour", "amount": "1" + "0" * 30 + " g"},
            {"name": "Rice", "amount": "9" * 400 + " g"},
        ]})

        assert response.status_code == 200
        body = response.json()
        assert [i["unit"] for i in body] == ["kg", "gram"]
        assert body[1]["amount"] == 1.0
