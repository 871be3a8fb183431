# src/page_digest/orchestration/constants.py

# Node names
EXTRACT_NODE = "EXTRACT"
SUMMARIZE_NODE = "SUMMARIZE"
