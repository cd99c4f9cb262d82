# Namespace for pipeline steps
from .load_entities import LoadEntities  # noqa: F401
from .select_published import SelectPublished  # noqa: F401
from .render_site import RenderSite  # noqa: F401
from .publish_site import PublishSite  # noqa: F401
from .notify_indexers import NotifyIndexers  # noqa: F401
