"""
Third-party AI integration.

- ``api_key_manager``: key rotation, retry and inactive marking
- ``providers``: DeepSeek, OpenAI and Gemini HTTP clients
- ``google_search``: Google Custom Search
- ``service``: ``call_ai`` with the provider fallback chain
"""
