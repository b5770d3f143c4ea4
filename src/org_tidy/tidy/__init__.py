from org_tidy.tidy.decorator import tidy  # noqa: F401
from org_tidy.tidy.restorer import untidy  # noqa: F401
from org_tidy.tidy.session import TidySession  # noqa: F401
