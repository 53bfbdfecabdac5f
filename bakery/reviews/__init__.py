"""
Customer review ingestion.

Responsibilities:
- Fetch the shared feedback spreadsheet from its public export endpoints.
- Parse the JSON-wrapped and CSV exports into a plain table.
- Infer which columns hold the reviewer name, review text and rating.
- Sanitize free text and drop rows that look like pasted script debris.
- Cache the result in process memory and degrade to stale data on failure.
"""
