"""
Service layer.

Each service encapsulates the business logic of one domain and talks
to the document store directly.  Services are plain instances wired
together by ``core.deps.build_services``; API handlers only translate
HTTP input into service calls.
"""
