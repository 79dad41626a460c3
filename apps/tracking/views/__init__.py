"""
GPS Views Package
Provides API views for the live tracking service
"""
