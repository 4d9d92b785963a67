"""Compliance-AI.

Backend for tracking EU AI Act compliance across an organisation's AI systems.

Subpackages
-----------

- ``compliance_ai.core``: logging, monitoring, the error taxonomy, password
  hashing, SQLModel entities and async repositories.
- ``compliance_ai.ai_services``: calls to third-party AI providers and Google
  Custom Search through an API key manager that rotates keys, retries, marks
  unusable keys inactive and falls back DeepSeek -> Gemini -> Google Search.
- ``compliance_ai.server``: the FastAPI application, its routers under
  ``/api/v1`` and the domain services (approval workflow, dashboard, training).
- ``compliance_ai.scripts``: administrative command line tools
  (``python -m compliance_ai.scripts.<name>``).
"""

__version__ = "1.0.0"
