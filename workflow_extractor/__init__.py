"""Core logic for the Workflow Extractor.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- parse workflow JSON inputs
- extract module records and flatten condition blocks
- collect a humanized glossary of SDK response keys
- serialize the resulting tables to CSV
"""
