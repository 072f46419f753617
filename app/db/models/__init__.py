from .common import *  # noqa
from .auth import *  # noqa
from .inventory import *  # noqa
from .storage import *  # noqa
from .orders import *  # noqa
from .picking import *  # noqa
from .integrations import *  # noqa
