# JSON:API response formatting functions
#
# Handler output is encoded into one of:
# - a singular document: {"data": {"id": .., "type": .., "attributes": {..}}}
# - a collection document: {"data": [{..}, {..}]}
# - an empty 404 when a lookup returned None
#
# The shape of "data" is determined by the singular flag of the handler, never by the item count
#
from http import HTTPStatus
from typing import Mapping, Optional
from .errors import GenericError
from .json_encoder import JsonapiResponse
from .jsonapi_types import Attributes, JSONAPIDocument, JSONAPIResourceObject


def jsonapi_encode_resource(resource_id: str, resource_type: str, attributes: Attributes) -> JSONAPIResourceObject:
    """
    :param resource_id: jsonapi id
    :param resource_type: jsonapi type
    :param attributes: attribute values, these are passed as is
    :return: jsonapi resource object
    """
    if not isinstance(attributes, Mapping):
        raise GenericError(f'Invalid attributes for {resource_type} "{resource_id}": {attributes!r}')
    return {"id": str(resource_id), "type": resource_type, "attributes": attributes}


def jsonapi_format_response(resource_type: str, items: Optional[Mapping[str, Attributes]], singular: bool) -> JSONAPIDocument:
    """
    Create a response dict according to the json:api schema spec
    :param resource_type: the jsonapi type of all items
    :param items: mapping of id to attributes, in the order they should appear in the response
    :param singular: whether data should be an object instead of an array
    :return: jsonapi formatted dictionary, empty if singular and there are no items
    """
    if not items:
        # a singular result without an item has no data, a collection is always an array
        return {} if singular else {"data": []}

    data = [jsonapi_encode_resource(resource_id, resource_type, attributes) for resource_id, attributes in items.items()]
    if singular:
        # only one item is expected here, the first one is used
        return {"data": data[0]}

    return {"data": data}


def jsonapi_format_instance(resource_id: str, resource_type: str, attributes: Optional[Attributes]) -> JsonapiResponse:
    """
    Encode the result of a single instance lookup
    :param resource_id: jsonapi id
    :param resource_type: jsonapi type
    :param attributes: instance attributes or None if the instance doesn't exist
    :return: JsonapiResponse, an empty 404 if attributes is None
    """
    if attributes is None:
        return JsonapiResponse(status_code=HTTPStatus.NOT_FOUND.value)

    document = {"data": jsonapi_encode_resource(resource_id, resource_type, attributes)}
    return JsonapiResponse(document)


def jsonapi_format_collection(resource_type: str, items: Optional[Mapping[str, Attributes]], singular: bool) -> JsonapiResponse:
    """
    Encode the result of a custom route handler
    """
    return JsonapiResponse(jsonapi_format_response(resource_type, items, singular))
