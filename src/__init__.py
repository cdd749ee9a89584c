"""Media Library Service Package."""

__version__ = "1.0.0"
__description__ = (
    "Serverless media library using AWS Lambda and DynamoDB: "
    "MediaType schemas and AI metadata suggestions"
)

__all__ = ["handlers", "core"]
