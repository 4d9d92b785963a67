"""
I/O models (request and response schemas) for the REST API.

These are plain pydantic models; the SQLModel table entities live in
``compliance_ai.core.database.entities`` and are converted with
``model_validate`` on the way out.
"""
