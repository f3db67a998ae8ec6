from typing import Any, TypeAlias


# Type aliases for handler payloads (API Gateway proxy format)
HandlerEvent: TypeAlias = dict[str, Any]
HandlerResponse: TypeAlias = dict[str, Any]
ResponseBody: TypeAlias = dict[str, Any]

# Raw configuration document, as loaded from JSON
ConfigDocument: TypeAlias = dict[str, Any]
