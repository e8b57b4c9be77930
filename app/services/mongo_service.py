"""
MongoDB Service - CRUD operations for the recruiting collections.

Collections in this database:
1. companies     - Employer profiles, each listing the ids of its jobs
2. jobs          - Job postings, stamped with their company's name/logo
3. applications  - Free-form application documents
4. candidates    - Job seeker profiles (only read for ownership checks)

Every store wraps one pymongo collection. Stores are grouped in a
StoreRegistry that routes receive through dependency injection, so any
object exposing the pymongo Database API (e.g. mongomock) can back them.
"""

from typing import Optional, List, Dict, Any, Iterable
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from app.db.mongodb import get_mongo_db, COLLECTIONS


# ============================================================
# HELPERS: ObjectId <-> string
# ============================================================

def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse an id coming from a URL. Returns None for malformed ids."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def _serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, list):
        return [_serialize_value(item) for item in value]
    if isinstance(value, dict):
        return {key: _serialize_value(item) for key, item in value.items()}
    return value


def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict (nested ids too)."""
    if doc is None:
        return None
    return _serialize_value(doc)


def serialize_docs(docs: Iterable[dict]) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def _without_id(data: dict) -> dict:
    """Clients never choose or change document ids."""
    return {key: value for key, value in data.items() if key != "_id"}


# ============================================================
# BASE STORE
# ============================================================

class MongoStore:
    """
    Generic CRUD over a single collection.
    All reads return serialized documents (ids as strings).
    """

    collection_name: str = ""

    def __init__(self, db: Database):
        self.collection: Collection = db[COLLECTIONS[self.collection_name]]

    def find(self, query: Optional[dict] = None, sort: Optional[List[tuple]] = None) -> List[dict]:
        """Fetch all matching documents, optionally sorted."""
        cursor = self.collection.find(query or {})
        if sort:
            cursor = cursor.sort(sort)
        return serialize_docs(cursor)

    def find_one(self, query: dict) -> Optional[dict]:
        return serialize_doc(self.collection.find_one(query))

    def get_by_id(self, doc_id: Any) -> Optional[dict]:
        """Fetch by ObjectId; malformed ids behave as missing ones."""
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        return self.find_one({"_id": oid})

    def insert(self, data: dict) -> dict:
        """Insert a document and return it with its new id."""
        doc = _without_id(data)
        doc["_id"] = ObjectId()
        self.collection.insert_one(doc)
        return serialize_doc(doc)

    def insert_many(self, items: List[dict]) -> List[dict]:
        """Batch insert. Returned documents keep the input order."""
        docs = [_without_id(item) for item in items]
        if not docs:
            return []
        for doc in docs:
            doc["_id"] = ObjectId()
        self.collection.insert_many(docs, ordered=True)
        return serialize_docs(docs)

    def update_by_id(self, doc_id: Any, fields: Dict[str, Any]) -> Optional[dict]:
        """
        Set the supplied fields on a document.

        Returns:
            The updated document, or None if no document has this id
        """
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        fields = _without_id(fields)
        if not fields:
            return self.find_one({"_id": oid})
        doc = self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": fields},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)

    def delete_by_id(self, doc_id: Any) -> bool:
        oid = to_object_id(doc_id)
        if oid is None:
            return False
        result = self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    def delete_all(self) -> int:
        """Delete every document. Returns how many were removed."""
        result = self.collection.delete_many({})
        return result.deleted_count


# ============================================================
# COMPANIES COLLECTION
# ============================================================

class CompanyStore(MongoStore):
    """
    Company documents. `jobs` holds ObjectIds of the company's jobs,
    maintained with atomic $push/$pull updates.
    """

    collection_name = "companies"

    def find_by_user(self, user_id: str) -> Optional[dict]:
        return self.find_one({"userId": user_id})

    def push_jobs(self, company_id: Any, job_ids: List[str]) -> bool:
        """Append job ids to the company's jobs list, keeping their order."""
        result = self.collection.update_one(
            {"_id": to_object_id(company_id)},
            {"$push": {"jobs": {"$each": [ObjectId(job_id) for job_id in job_ids]}}}
        )
        return result.matched_count > 0

    def pull_job(self, company_id: Any, job_id: str) -> bool:
        """Remove every occurrence of a job id. No-op if it is not listed."""
        job_oid = to_object_id(job_id)
        result = self.collection.update_one(
            {"_id": to_object_id(company_id)},
            {"$pull": {"jobs": job_oid if job_oid is not None else job_id}}
        )
        return result.matched_count > 0


# ============================================================
# JOBS COLLECTION
# ============================================================

class JobStore(MongoStore):
    collection_name = "jobs"

    def find_by_ids(self, job_ids: List[str]) -> List[dict]:
        """Fetch jobs in the order of `job_ids`, skipping ids with no document."""
        oids = [oid for oid in (to_object_id(job_id) for job_id in job_ids) if oid is not None]
        if not oids:
            return []
        by_id = {doc["_id"]: doc for doc in self.find({"_id": {"$in": oids}})}
        return [by_id[str(oid)] for oid in oids if str(oid) in by_id]

    def find_for_company(self, job_id: str, company_id: str) -> Optional[dict]:
        """Fetch a job only if it belongs to the given company."""
        job_oid = to_object_id(job_id)
        company_oid = to_object_id(company_id)
        if job_oid is None or company_oid is None:
            return None
        return self.find_one({"_id": job_oid, "companyId": company_oid})


# ============================================================
# APPLICATIONS COLLECTION
# ============================================================

class ApplicationStore(MongoStore):
    collection_name = "applications"

    def find_by_number(self, application_num: str) -> List[dict]:
        return self.find({"application_num": application_num})


# ============================================================
# CANDIDATES COLLECTION (read only)
# ============================================================

class CandidateStore(MongoStore):
    collection_name = "candidates"

    def find_by_user(self, user_id: str) -> Optional[dict]:
        return self.find_one({"userId": user_id})


# ============================================================
# CONVENIENCE: All stores over one database
# ============================================================

class StoreRegistry:
    """
    All stores over a single database.

    Usage:
        stores = StoreRegistry()
        stores.companies.get_by_id(company_id)
    """

    def __init__(self, db: Database = None):
        db = db if db is not None else get_mongo_db()
        self.companies = CompanyStore(db)
        self.jobs = JobStore(db)
        self.applications = ApplicationStore(db)
        self.candidates = CandidateStore(db)
