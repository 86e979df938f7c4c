"""Domain layer for letterdesk application.

Services are imported from their own modules (``letterdesk.domain.document``
and so on); this package only groups them.
"""
