"""
todo_service — a small REST service that stores todo items in Postgres.

Requests and database calls are traced with OpenTelemetry and exported over
OTLP, so the whole request path can be inspected in Jaeger.
"""
