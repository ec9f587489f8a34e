from typing import Any, Dict, List, Optional, Tuple, TypedDict, Union


# the fields of a single resource instance, None means "no such resource"
Attributes = Dict[str, Any]
OptionalAttributes = Optional[Attributes]


class JSONAPIResourceObject(TypedDict):
    id: str
    type: str
    attributes: Attributes


JSONAPIData = Union[JSONAPIResourceObject, List[JSONAPIResourceObject]]


class JSONAPIDocument(TypedDict, total=False):
    data: JSONAPIData
    errors: List[Dict[str, Any]]


# custom route handlers return (type label, {id: attributes}, singular)
CustomRouteResult = Tuple[str, Optional[Dict[str, Attributes]], bool]
