"""
Job Application Tracker UI - Flask app serving the job card API and the Kanban board.
"""
