import logging

from org_tidy.tidy.session import TidySession


def untidy(session: TidySession) -> None:
    """Remove every annotation the session created. No-op when nothing is tidied."""
    records = session.registry.drain_all()
    for record in records:
        session.host.remove_annotation(record.handle)
    if records:
        logging.info(f"Removed {len(records)} tidy annotations")
