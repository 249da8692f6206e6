from gym_portal.extensions import db


class ResourceLookup:
    """
    Load a resource for the ownership check

    ``owner_fields`` defaults to the model's declared ``owner_fields``: the
    attribute names holding user ids allowed to act on the resource.
    """

    def __init__(self, model, owner_fields=None):
        self.model = model
        self.owner_fields = tuple(owner_fields if owner_fields is not None
                                  else getattr(model, 'owner_fields', ()))

    @property
    def resource_type(self):
        return self.model.__name__

    def find_by_id(self, resource_id):
        return db.session.get(self.model, resource_id)

    def is_owner(self, resource, user_id):
        if resource.id == user_id:
            return True
        return any(getattr(resource, field, None) == user_id for field in self.owner_fields)
