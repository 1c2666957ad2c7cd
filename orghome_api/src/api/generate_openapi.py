import json
import os

from src.api.main import app

# Get the OpenAPI schema (health lives under /api/v1, org pages at the root)
openapi_schema = app.openapi()

# Ensure Organizations tag metadata is present
tags = openapi_schema.get("tags", [])
if not any(t.get("name") == "Organizations" for t in tags):
    tags.append({"name": "Organizations", "description": "Organization home pages."})
openapi_schema["tags"] = tags

# Document the viewer token, which the route declares as an optional dependency
openapi_schema["x-viewer-auth"] = {
    "header": "Authorization: Bearer <jwt>",
    "claims": {"sub": "user id (UUID)", "type": "access"},
    "anonymous": "Omit the header to browse anonymously.",
}

# Write to file
output_dir = "interfaces"
os.makedirs(output_dir, exist_ok=True)
output_path = os.path.join(output_dir, "openapi.json")

with open(output_path, "w") as f:
    json.dump(openapi_schema, f, indent=2)
