from .document_store import DOCUMENT_ID, Document, DocumentStore, Where

__all__ = ["DOCUMENT_ID", "Document", "DocumentStore", "Where"]
