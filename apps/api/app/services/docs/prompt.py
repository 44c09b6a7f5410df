from __future__ import annotations

import json

from app.services.docs.types import GenerationRequest

DEFAULT_TITLE = "API Documentation"


class _LossyJSON(ValueError):
    pass


def _unique_keys(pairs):
    obj = dict(pairs)
    if len(obj) != len(pairs):
        raise _LossyJSON("duplicate object key")
    return obj


def _exact_float(text: str) -> float:
    value = float(text)
    if json.dumps(value) != text:
        raise _LossyJSON(f"float literal {text} would be rewritten")
    return value


def _exact_int(text: str) -> int:
    value = int(text)
    if str(value) != text:
        raise _LossyJSON(f"int literal {text} would be rewritten")
    return value


def _reject_constant(text: str):
    raise _LossyJSON(f"non-standard constant {text}")


def _render_raw_input(raw_input: str) -> str:
    # Pretty-print only when dumping back keeps every value as written;
    # anything else goes in untouched.
    try:
        parsed = json.loads(
            raw_input,
            object_pairs_hook=_unique_keys,
            parse_float=_exact_float,
            parse_int=_exact_int,
            parse_constant=_reject_constant,
        )
    except (TypeError, ValueError, RecursionError):
        return raw_input
    try:
        return json.dumps(parsed, indent=2, ensure_ascii=False)
    except RecursionError:
        return raw_input


def build_prompt(request: GenerationRequest) -> str:
    name = request.name or DEFAULT_TITLE
    description = request.description or ""
    endpoints = _render_raw_input(request.raw_input)

    return f"""
# {name} API Documentation

**Description:**  
{description}

---

## Overview
This document provides a detailed overview of the API endpoints available in the **{name}** project. Each endpoint is explained with its purpose, request structure, and response format. The raw JSON input is also included for reference.

---

## API Endpoints

Below is the raw JSON representation of the API endpoints:

```json
{endpoints}
```

---

## Explanation of Endpoints

For each endpoint, the following details are provided:
- **Method**: The HTTP method (e.g., GET, POST, PUT, DELETE).
- **Path**: The URL path for the endpoint.
- **Description**: A brief explanation of the endpoint's purpose.
- **Request Schema**: The structure of the request payload (if applicable).
- **Response Schema**: The structure of the response payload.

---

## Example Usage

Here is an example of how to use the API:

```bash
# Example cURL request
curl -X POST https://api.example.com/endpoint \\
  -H "Content-Type: application/json" \\
  -d '{{
    "key": "value"
  }}'
```

---

## Notes
- Ensure that you have the proper authentication headers when making requests.
- Refer to the raw JSON input above for additional details about the API structure.

---

## Conclusion
This documentation was generated using AI and provides a comprehensive overview of the API. For further details, refer to the raw JSON input or contact the development team.
"""
