from repositories.data.items import ItemRepository, DynamoDbItemRepository

_item_repository_instance = None


def get_item_repository() -> ItemRepository:
    """Returns a singleton instance of the DynamoDbItemRepository."""
    global _item_repository_instance
    if _item_repository_instance is None:
        _item_repository_instance = DynamoDbItemRepository()
    return _item_repository_instance
