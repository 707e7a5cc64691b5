"""
MongoDB Service - persistence operations for the portal collections.

Collections in this database:
1. users        - accounts, credentials, tokens, profile attributes
2. jobs         - postings, each owned by one employer (postedBy)
3. applications - the application ledger

Every store exposes the same small surface:
count / find / find_one / find_by_id / create / save / delete.
Filters are always built with QuerySpec (jobportal.db.query).
"""

from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING
from pymongo.collection import Collection

from jobportal.core.errors import BadRequest
from jobportal.db.mongodb import COLLECTIONS, get_collection
from jobportal.db.query import QuerySpec


# ============================================================
# HELPERS: ObjectId conversion and JSON serialization
# ============================================================

def to_object_id(value: Any, field: str = "id") -> ObjectId:
    """Parse an id coming from a client; malformed ids are a bad request."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        raise BadRequest(f"Resource not found. Invalid {field}")


def serialize_doc(doc: Any) -> Any:
    """Convert a MongoDB document (possibly nested) to JSON-serializable form."""
    if doc is None:
        return None
    if isinstance(doc, ObjectId):
        return str(doc)
    if isinstance(doc, dict):
        return {key: serialize_doc(value) for key, value in doc.items()}
    if isinstance(doc, list):
        return [serialize_doc(item) for item in doc]
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


# ============================================================
# BASE STORE
# ============================================================

class DocumentStore:
    """
    Thin wrapper around one collection.
    Pass a collection explicitly (tests do) or let it resolve by name.
    """

    collection_name: str = ""

    def __init__(self, collection: Collection = None):
        if collection is None:
            collection = get_collection(COLLECTIONS[self.collection_name])
        self.collection: Collection = collection

    def count(self, query: QuerySpec) -> int:
        return self.collection.count_documents(query.to_filter())

    def find(self, query: QuerySpec, sort_by: Optional[str] = None, descending: bool = True) -> List[dict]:
        cursor = self.collection.find(query.to_filter())
        if sort_by:
            cursor = cursor.sort(sort_by, DESCENDING if descending else 1)
        return list(cursor)

    def find_one(self, query: QuerySpec) -> Optional[dict]:
        return self.collection.find_one(query.to_filter())

    def find_by_id(self, doc_id: Any, field: str = "id") -> Optional[dict]:
        return self.collection.find_one({"_id": to_object_id(doc_id, field)})

    def find_by_ids(self, doc_ids: Iterable[ObjectId], projection: Optional[Dict[str, int]] = None) -> Dict[ObjectId, dict]:
        """Fetch several documents at once, keyed by _id."""
        ids = list({doc_id for doc_id in doc_ids if doc_id is not None})
        if not ids:
            return {}
        cursor = self.collection.find(QuerySpec().one_of("_id", ids).to_filter(), projection)
        return {doc["_id"]: doc for doc in cursor}

    def create(self, doc: dict) -> dict:
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    def save(self, doc: dict) -> dict:
        self.collection.replace_one({"_id": doc["_id"]}, doc)
        return doc

    def delete(self, doc: dict) -> bool:
        result = self.collection.delete_one({"_id": doc["_id"]})
        return result.deleted_count > 0


# ============================================================
# USERS COLLECTION
# ============================================================

# Never leave the server
PRIVATE_USER_FIELDS = (
    "password",
    "verifyToken",
    "verifyTokenExpiry",
    "resetPasswordToken",
    "resetPasswordExpiry",
)


def public_user(doc: Optional[dict]) -> Optional[dict]:
    """User document without credential/token fields, ready for JSON."""
    if doc is None:
        return None
    return serialize_doc({k: v for k, v in doc.items() if k not in PRIVATE_USER_FIELDS})


class UserStore(DocumentStore):
    collection_name = "users"

    def find_by_email(self, email: str) -> Optional[dict]:
        return self.find_one(QuerySpec().where("email", email))


# ============================================================
# JOBS COLLECTION
# ============================================================

class JobStore(DocumentStore):
    collection_name = "jobs"


# ============================================================
# APPLICATIONS COLLECTION
# ============================================================

# Fields copied from the referenced records when listing applications
APPLICANT_FIELDS = ("name", "email", "phone", "address", "skills", "experience", "education")
JOB_FIELDS = ("title", "description", "category")


class ApplicationStore(DocumentStore):
    collection_name = "applications"

    def populate(self, applications: List[dict], users: UserStore, jobs: JobStore) -> List[dict]:
        """
        Replace applicantID.user and job references with summaries of the
        referenced documents. References to deleted records are left as ids.
        """
        applicants = users.find_by_ids(
            (app["applicantID"]["user"] for app in applications),
            projection={field: 1 for field in APPLICANT_FIELDS},
        )
        job_docs = jobs.find_by_ids(
            (app["job"] for app in applications),
            projection={field: 1 for field in JOB_FIELDS},
        )

        populated = []
        for app in applications:
            app = dict(app)
            applicant_id = app["applicantID"]["user"]
            if applicant_id in applicants:
                app["applicantID"] = {**app["applicantID"], "user": applicants[applicant_id]}
            if app["job"] in job_docs:
                app["job"] = job_docs[app["job"]]
            populated.append(app)
        return populated
