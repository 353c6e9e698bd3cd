"""Business services for the forum, assessments and chat relay."""
