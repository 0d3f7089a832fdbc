"""upload-service: document upload, listing and download over HTTP."""
