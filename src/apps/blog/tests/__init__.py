"""
Blog app tests package.

Model, repository, service and API tests for blogs and posts.
"""
