"""
ResourceRegistry module mapping type discriminators to resource classes and field decoders
"""

from typing import Any, Callable, Dict, Iterable, Optional, Tuple, Type

from ..dates import parse_date


# A decoder receives the client handle and the raw JSON value of one field
FieldDecoder = Callable[[Any, Any], Any]


class ResourceRegistry:
    """
    Static table of known resource types

    A type name maps either to a resource class or to None. None marks a
    known type that must not be instantiated (e.g. 'search'), which is
    distinct from a type that was never registered.
    """

    def __init__(self):
        self._types: Dict[str, Optional[type]] = {}
        self._decoders: Dict[Tuple[str, str], FieldDecoder] = {}

    def register(self, type_name: str, resource_class: Optional[type],
                 decoders: Optional[Dict[str, FieldDecoder]] = None) -> None:
        """
        Register a resource class and its per-field decoders

        Args:
            type_name: Discriminator found in the payload's 'type' field
            resource_class: Class to instantiate, or None for a no-override entry
            decoders: Mapping of field name to decoder function
        """
        self._types[type_name] = resource_class
        for field_name, decoder in (decoders or {}).items():
            self._decoders[(type_name, field_name)] = decoder

    def resource(self, type_name: str,
                 decoders: Optional[Dict[str, FieldDecoder]] = None) -> Callable[[type], type]:
        """Class decorator registering a resource under a type name"""
        def decorator(resource_class: type) -> type:
            resource_class.type = type_name
            self.register(type_name, resource_class, decoders)
            return resource_class
        return decorator

    def is_registered(self, type_name: Any) -> bool:
        return type_name in self._types

    def resolve(self, type_name: str) -> Optional[type]:
        """
        Look up the class registered for a type name

        Raises:
            KeyError: If the type name was never registered
        """
        return self._types[type_name]

    def decoder_for(self, type_name: Optional[str], field_name: str) -> Optional[FieldDecoder]:
        if type_name is None:
            return None
        return self._decoders.get((type_name, field_name))

    def registered_types(self) -> Iterable[str]:
        return tuple(self._types)


RESOURCE_REGISTRY = ResourceRegistry()
register_resource = RESOURCE_REGISTRY.resource


def decode_date(client: Any, value: Any) -> Any:
    return parse_date(value)


def resource_list_decoder(type_name: str) -> FieldDecoder:
    """
    Build a decoder turning a list of raw mappings into resources of one type

    Args:
        type_name: Registered type to instantiate for each item

    Returns:
        Decoder function for use in a registration table
    """
    def decode(client: Any, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        resource_class = RESOURCE_REGISTRY.resolve(type_name)
        return [
            resource_class(client, item) if isinstance(item, dict) else item
            for item in value
        ]
    return decode
