"""
HTTP API (FastAPI)

HTTP surface over the commitment core:
- GET /catalog, GET /index/{field_name} - Catalog lookup
- POST /root, POST /proof, POST /verify - Offline Merkle operations
- POST /commitments, GET /commitments/{timestamp} - Timestamp-keyed roots
- POST /commitments/{timestamp}/verify - Verify against a committed root
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
