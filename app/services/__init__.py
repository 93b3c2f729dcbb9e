"""
Services layer - Business logic goes here.
Keep services focused on specific domains (reports, map views, missions).

DESIGN PRINCIPLE:
- Services contain business logic, NOT routes
- Pure functions (hotspot_aggregator, proximity_alerts, duplicate_detection,
  severity) take report dicts and never touch Firestore
- report_store is the only module that reads or writes the reports collection
- Moderation status is set by admins (scripts/manage_report.py), never derived
"""
