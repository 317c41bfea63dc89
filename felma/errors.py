# Felma Shared Errors
# Store failures, kept apart from rating and stage validation errors


class StoreError(Exception):
    """The item store could not be read or written."""


class ItemNotFound(LookupError):
    """No item exists with the requested id."""

    def __init__(self, item_id):
        self.item_id = item_id
        super().__init__(f"Item '{item_id}' not found")
