"""FastAPI web application for depscout."""

from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from pydantic import BaseModel

from depscout.errors import DepscoutError
from depscout.models import Ecosystem
from depscout.parse import parse_content, to_ecosystem
from depscout.registry import BASE_CONFIDENCE, REGISTRY, match_filename
from depscout.sniff import identify

app = FastAPI(
    title="depscout",
    description="Detect dependency manifests and extract normalised dependency lists",
    version="0.1.0",
)


class ParseRequest(BaseModel):
    """Request model for parsing manifest content."""
    content: str
    ecosystem: Optional[str] = None
    filename: Optional[str] = None


class DependencyModel(BaseModel):
    name: str
    version: str


class ParseResponse(BaseModel):
    """Response model for parsed dependencies."""
    ecosystem: str
    confidence: float
    dependencies: list[DependencyModel]


def detect_ecosystem(content: str, filename: str | None) -> tuple[Ecosystem, float] | None:
    """Resolve the ecosystem of uploaded content from its filename, then its text."""
    if filename:
        match = match_filename(filename.rsplit("/", 1)[-1])
        if match:
            definition, file_type = match
            return definition.name, BASE_CONFIDENCE[file_type]

    signature = identify(content)
    if signature:
        return signature.ecosystem, signature.confidence
    return None


@app.get("/api/ecosystems")
async def list_ecosystems():
    """List supported ecosystems."""
    return {
        "ecosystems": [
            {"name": str(definition.name), "display_name": definition.display_name}
            for definition in REGISTRY
        ]
    }


@app.post("/api/parse", response_model=ParseResponse)
async def parse_manifest(request: ParseRequest):
    """Parse dependencies from manifest text."""
    content = request.content.strip()
    if not content:
        raise HTTPException(status_code=400, detail="No content provided")

    try:
        if request.ecosystem:
            ecosystem, confidence = to_ecosystem(request.ecosystem), 1.0
        else:
            detected = detect_ecosystem(content, request.filename)
            if detected is None:
                raise HTTPException(status_code=400, detail="Could not detect ecosystem from content")
            ecosystem, confidence = detected

        dependencies = parse_content(content, ecosystem)
    except DepscoutError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not dependencies:
        raise HTTPException(status_code=400, detail="No dependencies found")

    return ParseResponse(
        ecosystem=str(ecosystem),
        confidence=confidence,
        dependencies=[DependencyModel(**dep.to_dict()) for dep in dependencies],
    )


@app.post("/api/upload", response_model=ParseResponse)
async def upload_manifest(
    file: UploadFile = File(...),
    ecosystem: Optional[str] = Form(None),
):
    """Upload and parse a manifest file."""
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    raw = await file.read()
    try:
        text_content = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be valid UTF-8 text")

    request = ParseRequest(content=text_content, ecosystem=ecosystem, filename=file.filename)
    return await parse_manifest(request)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
