# Models package - activity pipeline tables
from activity_pipeline.models.activity import Activity
from activity_pipeline.models.follow_up import ActivityFollowUp, Priority
