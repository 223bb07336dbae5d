"""
learning_hub – Role-based learning & skills development dashboard
=================================================================
Module map
----------
  config             .env / environment settings, logging setup
  models             pydantic records: users, employees, learning paths, courses
  mock_data          the bundled dataset and lookup helpers
  session_store      SQLite key/value persistence of the signed-in user
  auth               AuthManager (login / logout / restore) and view routing
  analytics          progress, skill gaps, team and system statistics
  learning_path      prerequisite graph: cycles, ordering, unlock state
  guardrails         dataset consistency checks (D-01 … D-08)
  profile_agent      simulated skill proficiency / demand analysis
  assessment_agent   assessment catalogue and adaptive quiz session
  recommender_agent  relevance-ranked course recommendations
  tracker_agent      progress tracker report
  reports            manager quick actions, team PDF, reminder e-mail
  ui                 shared Streamlit bootstrap and HTML helpers
"""

__version__ = "0.1.0"
