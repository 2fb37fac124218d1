"""
LeadSync - keeps local contacts and activities in step with a remote CRM
and ranks contacts for outreach.
"""
__version__ = "1.0.0"
