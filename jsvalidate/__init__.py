import importlib

mod = "jsvalidate"
class LazyLoader:
    """
    Lazy loader for the jsvalidate functions to speed up startup time.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item in self._mappings:
            module_name, attr_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, attr_name)
        else:
            return self._load_module(f"{mod}.{item}")

# Define the public names and their corresponding module paths
_mappings = {
    "validate": (f"{mod}.validation", "validate"),
    "is_valid": (f"{mod}.validation", "is_valid"),
    "validate_instance": (f"{mod}.validation", "validate_instance"),
    "validate_file": (f"{mod}.validation", "validate_file"),
    "validate_json_instances": (f"{mod}.validation", "validate_json_instances"),
    "ValidationResult": (f"{mod}.validation", "ValidationResult"),
    "create_value": (f"{mod}.defaults", "create_value"),
    "has_format": (f"{mod}.formats", "has_format"),
    "matches_format": (f"{mod}.formats", "matches_format"),
    "ValidationOptions": (f"{mod}.options", "ValidationOptions"),
    "ValidationError": (f"{mod}.errors", "ValidationError"),
    "ErrorKind": (f"{mod}.errors", "ErrorKind"),
    "make_error": (f"{mod}.errors", "make_error"),
    "add_errors": (f"{mod}.errors", "add_errors"),
    "SchemaError": (f"{mod}.errors", "SchemaError"),
    "SchemaCycleError": (f"{mod}.errors", "SchemaCycleError"),
    "ValidationDepthError": (f"{mod}.errors", "ValidationDepthError"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
