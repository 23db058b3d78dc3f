API = "/api/v1"

COMPANY = {"industry": "it", "employee_count": 15, "annual_revenue": 8000}
ANSWERS = {"subsidy_purpose": "it_introduction"}


def _start(client, **body):
    r = client.post(f"{API}/diagnosis/start", json=body)
    assert r.status_code == 201, r.text
    return r.json()


def _answer(client, session_id, question_key, answer, **extra):
    payload = {"session_id": session_id, "question_key": question_key, "answer": answer, **extra}
    return client.post(f"{API}/diagnosis/answer", json=payload)


# -------------------------
# SERVICE
# -------------------------
def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_database_health_without_connection(client):
    r = client.get("/health/database")
    assert r.status_code == 200
    assert r.json() == {"status": "unhealthy", "database": "disconnected"}


# -------------------------
# SUBSIDIES
# -------------------------
def test_list_subsidies(client):
    r = client.get(f"{API}/subsidies/")
    assert r.status_code == 200
    assert [s["id"] for s in r.json()] == ["it-donyu", "monozukuri", "jizokuka"]


def test_get_subsidy_and_not_found(client):
    r = client.get(f"{API}/subsidies/monozukuri")
    assert r.status_code == 200
    assert r.json()["name"] == "ものづくり補助金"

    r = client.get(f"{API}/subsidies/unknown")
    assert r.status_code == 404


def test_create_subsidy_validates_and_rejects_duplicates(client, store):
    new_entry = {
        "id": "shoene",
        "name": "省エネ補助金",
        "eligibility_rules": [{"field_name": "industry", "operator": "equals", "value": "manufacturing"}],
    }
    r = client.post(f"{API}/subsidies/", json=new_entry)
    assert r.status_code == 201, r.text
    assert any(s.id == "shoene" for s in store.subsidies)

    r = client.post(f"{API}/subsidies/", json=new_entry)
    assert r.status_code == 409

    r = client.post(f"{API}/subsidies/", json={"id": "bad", "name": "bad", "eligibility_rules": [{"value": 1}]})
    assert r.status_code == 422


# -------------------------
# ELIGIBILITY
# -------------------------
def test_match_ranks_catalog(client):
    r = client.post(f"{API}/eligibility/match", json={"company_info": COMPANY, "answers": ANSWERS})
    assert r.status_code == 200, r.text
    data = r.json()

    ranked = [(m["subsidy_id"], m["match_score"], m["eligibility_status"]) for m in data["matched_subsidies"]]
    assert ranked == [
        ("it-donyu", 100, "eligible"),
        ("monozukuri", 63, "potentially_eligible"),
        ("jizokuka", 50, "potentially_eligible"),
    ]
    assert data["total_subsidies_checked"] == 3
    assert data["recommendation_count"] == 1


def test_match_overrides_take_precedence(client):
    r = client.post(f"{API}/eligibility/match", json={
        "company_info": COMPANY,
        "answers": ANSWERS,
        "overrides": {"subsidy_purpose": "sales_expansion", "industry": "retail"},
        "subsidy_ids": ["jizokuka"],
    })
    assert r.status_code == 200, r.text
    matched = r.json()["matched_subsidies"]

    assert len(matched) == 1
    assert matched[0]["match_score"] == 100
    assert matched[0]["next_steps"][0] == "申請書類の準備を開始してください"


def test_evaluate_inline_catalog(client):
    r = client.post(f"{API}/eligibility/evaluate", json={
        "catalog": [
            {"id": "a", "name": "A", "eligibility_rules": [
                {"field_name": "employee_count", "operator": "between", "value": [6, 20]}
            ]},
            {"id": "b", "name": "B", "eligibility_rules": [
                {"field_name": "revenue", "operator": "greater_than", "value": 1000000}
            ]},
        ],
        "applicant": {"employee_count": 15, "revenue": "abc"},
    })
    assert r.status_code == 200, r.text
    results = r.json()

    assert [(m["subsidy_id"], m["match_score"]) for m in results] == [("a", 100), ("b", 0)]
    assert results[1]["missing_requirements"] == ["revenueが1000000を超える必要があります"]


def test_evaluate_empty_catalog(client):
    r = client.post(f"{API}/eligibility/evaluate", json={"catalog": [], "applicant": {"industry": "it"}})
    assert r.status_code == 200
    assert r.json() == []


def test_evaluate_rejects_malformed_catalog(client):
    r = client.post(f"{API}/eligibility/evaluate", json={
        "catalog": [{"id": "a", "name": "A", "eligibility_rules": [{"operator": "equals", "value": 1}]}],
        "applicant": {},
    })
    assert r.status_code == 422


def test_supported_operators(client):
    r = client.get(f"{API}/eligibility/operators")
    assert r.status_code == 200
    assert set(r.json()) == {
        "equals", "not_equals", "greater_than", "less_than", "greater_than_or_equal",
        "less_than_or_equal", "contains", "in", "between",
    }


# -------------------------
# DIAGNOSIS FLOW
# -------------------------
def test_basic_questions(client):
    r = client.get(f"{API}/diagnosis/basic-questions")
    assert r.status_code == 200
    assert [q["id"] for q in r.json()["data"]] == [
        "company_name", "industry", "employee_count", "annual_revenue", "location", "subsidy_purpose",
    ]


def test_full_diagnosis_flow(client):
    started = _start(client, initial_data={"company_name": "株式会社サンプル", "industry": "it"})
    session_id = started["session_id"]
    assert started["current_step"] == "basic_info"
    assert started["progress"] == 0
    assert started["session_token"]

    r = _answer(client, session_id, "employee_count", "15", current_step="company_size", progress=40)
    assert r.status_code == 200, r.text
    assert r.json()["current_step"] == "company_size"
    assert r.json()["progress"] == 40

    assert _answer(client, session_id, "annual_revenue", "8000").status_code == 200
    assert _answer(client, session_id, "subsidy_purpose", "it_introduction", progress=100).status_code == 200

    r = client.get(f"{API}/diagnosis/session/{session_id}")
    assert r.status_code == 200
    detail = r.json()
    assert detail["session"]["company_info"]["name"] == "株式会社サンプル"
    assert detail["session"]["company_info"]["employee_count"] == 15
    assert detail["session"]["company_info"]["annual_revenue"] == 8000
    assert len(detail["answers"]) == 3

    r = client.post(f"{API}/diagnosis/complete/{session_id}")
    assert r.status_code == 200, r.text
    completed = r.json()
    assert completed["session_id"] == session_id
    assert [m["match_score"] for m in completed["matched_subsidies"]] == [100, 63, 50]
    assert completed["recommendation_count"] == 1

    session = client.get(f"{API}/diagnosis/session/{session_id}").json()["session"]
    assert session["status"] == "completed"
    assert session["completed_at"] is not None
    assert len(session["matched_subsidies"]) == 3

    # completed sessions reject further answers and completion
    assert _answer(client, session_id, "location", "tokyo").status_code == 400
    assert client.post(f"{API}/diagnosis/complete/{session_id}").status_code == 400

    r = client.post(f"{API}/diagnosis/match/{session_id}")
    assert r.status_code == 200
    assert r.json()["matched_subsidies"] == completed["matched_subsidies"]


def test_reanswering_replaces_previous_answer(client, store):
    session_id = _start(client)["session_id"]

    _answer(client, session_id, "industry", "retail")
    _answer(client, session_id, "industry", "manufacturing")

    answers = client.get(f"{API}/diagnosis/session/{session_id}").json()["answers"]
    assert [(a["question_key"], a["answer"]) for a in answers] == [("industry", "manufacturing")]
    assert store.sessions[session_id].company_info.industry == "manufacturing"


def test_unknown_session_returns_404(client):
    assert client.get(f"{API}/diagnosis/session/missing").status_code == 404
    assert client.post(f"{API}/diagnosis/complete/missing").status_code == 404
    assert client.post(f"{API}/diagnosis/match/missing").status_code == 404
    assert _answer(client, "missing", "industry", "it").status_code == 404


def test_answer_requires_question_key(client):
    session_id = _start(client)["session_id"]
    r = client.post(f"{API}/diagnosis/answer", json={"session_id": session_id, "answer": "x"})
    assert r.status_code == 422


def test_non_string_answer_to_text_question(client, store):
    session_id = _start(client)["session_id"]

    r = _answer(client, session_id, "industry", 5)
    assert r.status_code == 200, r.text

    session = store.sessions[session_id]
    assert session.company_info.industry == "5"
    assert session.diagnosis_data.answers == {"industry": 5}
    assert store.answers[session_id]["industry"].answer == 5
