"""Example plugin config registering a structured resource."""


def configure(registrar):
    registrar.register_resource(
        # Called each time the resource is needed.
        lambda: {"bar": "Hello"},
        "requiredArgument",
        None,
    )
