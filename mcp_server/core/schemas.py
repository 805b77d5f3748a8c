"""
Data schemas for the MCP demo servers: JSON-RPC envelopes, tool inputs, search rows
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

JSONRPC_VERSION = "2.0"

# strict so a boolean id is rejected rather than coerced to 1
RequestId = Union[StrictStr, StrictInt, None]


class JsonRpcRequest(BaseModel):
    """Incoming JSON-RPC 2.0 request or notification"""
    model_config = ConfigDict(extra="allow")

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId = None
    method: str
    params: Optional[Dict[str, Any]] = None

    @property
    def is_notification(self) -> bool:
        # a request without an "id" member expects no response
        return "id" not in self.model_fields_set


class ErrorData(BaseModel):
    code: int
    message: str
    data: Optional[Any] = None


class JsonRpcResponse(BaseModel):
    """Outgoing JSON-RPC 2.0 response carrying exactly one of result or error"""
    jsonrpc: str = JSONRPC_VERSION
    id: RequestId = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[ErrorData] = None

    @classmethod
    def success(cls, request_id: RequestId, result: Dict[str, Any]) -> "JsonRpcResponse":
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: RequestId, code: int, message: str, data: Any = None) -> "JsonRpcResponse":
        return cls(id=request_id, error=ErrorData(code=code, message=message, data=data))

    def to_dict(self) -> Dict[str, Any]:
        body = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            body["error"] = self.error.model_dump(exclude_none=True)
        else:
            body["result"] = self.result if self.result is not None else {}
        return body


class CallToolParams(BaseModel):
    name: str
    arguments: Optional[Dict[str, Any]] = None


@dataclass
class SearchRow:
    """One ranked hit from a search backend.

    ``relevance`` is a score for full-text backends (higher is better) and a
    distance for vector backends (lower is better); ``relevance_kind`` names
    which, and the serialized row repeats the value under that key.
    """
    id: str
    relevance: Optional[float]
    fields: Dict[str, Any] = field(default_factory=dict)
    document: Optional[str] = None
    relevance_kind: str = "score"

    def to_dict(self) -> Dict[str, Any]:
        row = {
            "id": self.id,
            "relevance": self.relevance,
            self.relevance_kind: self.relevance,
            "fields": self.fields,
        }
        if self.document is not None:
            row["document"] = self.document
        return row


# Tool input models. The JSON schema advertised by tools/list is generated
# from these, and tools/call arguments are validated against them.


class NoArguments(BaseModel):
    model_config = ConfigDict(extra="ignore")


class BinaryOperands(BaseModel):
    a: float = Field(description="First number")
    b: float = Field(description="Second number")


class WeatherRequest(BaseModel):
    location: str = Field(min_length=1,
                          description="Location to get weather for")


class ElasticsearchSearchRequest(BaseModel):
    index: str = Field(min_length=1, description="Index to search")
    query: str = Field(min_length=1, description="Search query")
    size: Optional[int] = Field(default=None, ge=1,
                                description="Max results (default: 10)")


class ElasticsearchIndexRequest(BaseModel):
    index: str = Field(min_length=1, description="Index name")
    document: Dict[str, Any] = Field(description="Document to index")
    id: Optional[str] = Field(default=None,
                              description="Optional document ID; reusing an ID overwrites the document")
    refresh: bool = Field(default=False,
                          description="Refresh the index so the document is searchable immediately")


class ChromaQueryRequest(BaseModel):
    collection: Optional[str] = Field(default=None,
                                      description="Collection to search (default: products)")
    query: str = Field(min_length=1, description="Natural language search text")
    n_results: Optional[int] = Field(default=None, ge=1,
                                     description="Number of results to return (default: 5)")


class ChromaCollectionRequest(BaseModel):
    collection: str = Field(min_length=1, description="Collection name")
