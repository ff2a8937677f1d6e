"""get_upload_url tool: presigned upload target for one input field.

A field the API does not return a URL for is reported as text, not raised:
the caller usually just picked the wrong field name for that service.
"""
from __future__ import annotations

from ..core.errors import ToolInputError

TOOL_DEFINITION = {
    "name": "get_upload_url",
    "description": (
        "Get a presigned URL to upload a file for inference. Use this when you need to upload "
        "a local file (audio, image, etc.) before running inference."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "service": {
                "type": "string",
                "description": 'Service alias (e.g., "whisper", "sdxl")',
            },
            "input_field": {
                "type": "string",
                "description": 'Which input field needs the file (e.g., "audio_filename", "image")',
            },
        },
        "required": ["service", "input_field"],
    },
}


def missing_field_text(service: str, input_field: str) -> str:
    return (
        f'Error: Could not get upload URL for field "{input_field}". '
        f"Make sure the field name is correct for the {service} service."
    )


async def get_upload_url(client, service: str, input_field: str) -> str:
    if not service or not input_field:
        raise ToolInputError("service and input_field are required")
    urls = await client.get_presigned_urls(service, [input_field])
    target = urls.get(input_field)
    if target is None:
        return missing_field_text(service, input_field)

    out = "**Upload URL Generated**\n\n"
    out += "Upload your file using a PUT request to:\n"
    out += f"`{target.upload_url}`\n\n"
    out += "After uploading, use this filename in your infer() call:\n"
    out += f"`{target.filename}`\n\n"
    out += "**Example cURL command:**\n"
    out += "```bash\n"
    out += f'curl -X PUT -T your-file.wav "{target.upload_url}"\n'
    out += "```\n\n"
    out += "**Then run inference:**\n"
    out += "```\n"
    out += "infer(\n"
    out += f'  service="{service}",\n'
    out += f'  input={{"{input_field}": "{target.filename}"}}\n'
    out += ")\n"
    out += "```\n"
    return out


__all__ = ["TOOL_DEFINITION", "get_upload_url", "missing_field_text"]
