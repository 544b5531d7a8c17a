from dishka import Provider as DishkaProvider

from ally.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for all ally DI providers.

    Dependencies default to Scope.APP unless a provide() call says otherwise.
    """

    scope = Scope.APP
