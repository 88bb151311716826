"""
Chartflow Application Package
=============================
FastAPI surface over the chart layer and the workflow nodes.
"""
