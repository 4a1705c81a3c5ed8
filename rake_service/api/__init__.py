"""FastAPI routes and endpoints.

Endpoints:
- GET /health: Service health status
- GET /ready: Readiness probe (default stopwords loaded)
- POST /v1/keywords: RAKE keyphrase extraction for one document
"""
