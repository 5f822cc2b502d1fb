import yaml
from main import app  # Import your FastAPI app

# Only the archive is per-user; extraction and cards are stateless
AUTHENTICATED_PREFIXES = ("/archive",)

openapi_schema = app.openapi()

# API Gateway only imports OpenAPI 3.0
openapi_schema["openapi"] = "3.0.0"

openapi_schema["info"] = {
    "title": "A Word for This API",
    "description": "Completion parsing, share cards and word archive for A Word for This",
    "version": "1.0.0"
}

openapi_schema.setdefault("components", {}).setdefault("securitySchemes", {})
openapi_schema["components"]["securitySchemes"]["CognitoAuthorizer"] = {
    "type": "apiKey",
    "name": "Authorization",
    "in": "header",
    "x-amazon-apigateway-authtype": "cognito_user_pools",
    "x-amazon-apigateway-authorizer": {
        "type": "cognito_user_pools",
        "providerARNs": [
            "${cognito_user_pool_arn}"  # Replaced when deploying
        ]
    }
}


def _rename_ref(holder: dict, old: str, new: str):
    ref = holder.get("$ref", "")
    if ref.endswith(f"/{old}"):
        holder["$ref"] = ref[: -len(old)] + new


# API Gateway model names must be alphanumeric
schemas = openapi_schema["components"].get("schemas", {})
renamed = {name: name.replace("-", "").replace("_", "") for name in schemas}
openapi_schema["components"]["schemas"] = {renamed[name]: content for name, content in schemas.items()}

for path, methods in openapi_schema["paths"].items():
    for method, details in methods.items():
        for old, new in renamed.items():
            if old == new:
                continue
            body = details.get("requestBody", {}).get("content", {}).get("application/json", {})
            if "schema" in body:
                _rename_ref(body["schema"], old, new)
            for response in details.get("responses", {}).values():
                schema = response.get("content", {}).get("application/json", {}).get("schema")
                if schema:
                    _rename_ref(schema, old, new)

        if path.startswith(AUTHENTICATED_PREFIXES):
            details["security"] = [{"CognitoAuthorizer": []}]

        details["x-amazon-apigateway-integration"] = {
            "uri": "${lambda_arn}",
            "httpMethod": "POST",
            "type": "aws_proxy"
        }

        # Successful card responses are binary, everything else is JSON
        for status_code, response in details.get("responses", {}).items():
            binary = path == "/word/card" and status_code == "200"
            response["content"] = {"image/png" if binary else "application/json": {}}


with open("openapi.yaml", "w") as f:
    yaml.dump(openapi_schema, f, default_flow_style=False)

print("OpenAPI schema has been generated and saved to openapi.yaml")
