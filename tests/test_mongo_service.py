from datetime import datetime
from bson import ObjectId

from app.db.mongodb import init_mongo_indexes
from app.services.mongo_service import serialize_doc, to_object_id


def test_to_object_id():
    oid = ObjectId()
    assert to_object_id(oid) is oid
    assert to_object_id(str(oid)) == oid
    assert to_object_id("abc") is None
    assert to_object_id(None) is None


def test_serialize_doc_converts_nested_ids():
    company_id, job_id = ObjectId(), ObjectId()
    deadline = datetime(2025, 1, 1)

    doc = serialize_doc({"_id": company_id, "jobs": [job_id], "meta": {"owner": job_id}, "deadline": deadline})

    assert doc == {"_id": str(company_id), "jobs": [str(job_id)], "meta": {"owner": str(job_id)}, "deadline": deadline}
    assert serialize_doc(None) is None


def test_insert_ignores_client_id(stores):
    chosen = str(ObjectId())

    doc = stores.applications.insert({"_id": chosen, "application_num": "1"})

    assert doc["_id"] != chosen


def test_update_with_no_fields_returns_document(stores):
    doc = stores.applications.insert({"application_num": "1"})
    assert stores.applications.update_by_id(doc["_id"], {}) == doc


def test_update_missing_document(stores):
    assert stores.applications.update_by_id(str(ObjectId()), {"a": 1}) is None
    assert stores.applications.update_by_id("bad-id", {"a": 1}) is None


def test_find_by_ids_keeps_order_and_skips_missing(stores):
    first = stores.jobs.insert({"description": "a"})
    second = stores.jobs.insert({"description": "b"})

    jobs = stores.jobs.find_by_ids([second["_id"], str(ObjectId()), first["_id"], "bad-id"])

    assert [job["description"] for job in jobs] == ["b", "a"]


def test_push_and_pull_jobs(stores):
    company = stores.companies.insert({"userId": "u", "name": "Acme", "jobs": []})
    job_ids = [str(ObjectId()), str(ObjectId())]

    assert stores.companies.push_jobs(company["_id"], job_ids)
    assert stores.companies.get_by_id(company["_id"])["jobs"] == job_ids

    assert stores.companies.pull_job(company["_id"], job_ids[0])
    assert stores.companies.get_by_id(company["_id"])["jobs"] == job_ids[1:]


def test_push_jobs_to_missing_company(stores):
    assert not stores.companies.push_jobs(str(ObjectId()), [str(ObjectId())])


def test_delete_all_counts(stores):
    stores.applications.insert({"application_num": "1"})
    stores.applications.insert({"application_num": "2"})

    assert stores.applications.delete_all() == 2
    assert stores.applications.delete_all() == 0


def test_init_indexes(db):
    init_mongo_indexes(db)
    assert "userId_1" in db["companies"].index_information()
