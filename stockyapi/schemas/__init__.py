# Pydantic schemas - request/response and service-layer models
