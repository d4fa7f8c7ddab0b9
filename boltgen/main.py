from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from typing import Optional
import uvicorn
import logging

from boltgen.config import GENERATION_FAILED_MESSAGE, load_settings
from boltgen.core.errors import ArtifactNotFound, GenerationFailure, UnknownSchemaVersion
from boltgen.export.artifacts import ArtifactStore
from boltgen.export.generator import FastenerGenerator, build_argv
from boltgen.params.resolve import normalize
from boltgen.params.schema import PARAM_SCHEMA, get_schema
from boltgen.params.thread_sizes import THREAD_SIZES

settings = load_settings()

# Configure Logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger("bolt-generator")

app = FastAPI(
    title="Bolt Generator",
    version="1.0.0",
    description="Parametric bolt and nut generation"
)

# CORS (Allow Frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], # Allow any local port
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

generator = FastenerGenerator(settings)
store = ArtifactStore(settings.artifact_path)


def _schema_or_error(version: Optional[int]):
    try:
        return get_schema(settings.schema_version if version is None else version), None
    except UnknownSchemaVersion as e:
        return None, JSONResponse(status_code=400, content={"error": str(e), "fields": {"schema": "unknown"}})


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "bolt-generator"}


@app.get("/schema")
async def param_schema(schema: Optional[int] = Query(None)):
    """Field metadata plus the defaults of the requested generation."""
    active, error = _schema_or_error(schema)
    if error:
        return error
    return {
        "version": active.version,
        "required": list(active.required),
        "fields": PARAM_SCHEMA,
        "defaults": dict(active.defaults),
        "threadSizes": list(THREAD_SIZES),
    }


@app.post("/normalize")
async def normalize_params(params: dict, schema: Optional[int] = Query(None)):
    """
    Normalizes params without running the generator.
    Returns resolved_params and the generator argument vector.
    """
    active, error = _schema_or_error(schema)
    if error:
        return error
    result = normalize(params, active)
    if not result.ok:
        return JSONResponse(status_code=400, content=result.error.to_dict())
    return {
        "resolved_params": result.spec.to_dict(),
        "argv": build_argv(result.spec),
    }


@app.post("/generate")
def generate_bolt(params: dict, schema: Optional[int] = Query(None)):
    """
    Generates a bolt (and optional nut).
    Returns JSON with artifact URLs and resolved_params.
    """
    active, error = _schema_or_error(schema)
    if error:
        return error

    result = normalize(params, active)
    if not result.ok:
        logger.info("Rejected request: %s", result.error.fields)
        return JSONResponse(status_code=400, content=result.error.to_dict())
    spec = result.spec

    try:
        generated = generator.run(spec)
    except GenerationFailure:
        return JSONResponse(status_code=500, content={"error": GENERATION_FAILED_MESSAGE})

    response = {
        "success": True,
        "filename": spec.filename,
        "downloadUrl": f"/download/{spec.filename}.brep",
        "previewUrl": f"/preview/{spec.filename}.stl",
        "resolved_params": spec.to_dict(),
    }
    if generated.nut_generated:
        response["nutGenerated"] = True
        response["nutDownloadUrl"] = f"/download/{spec.filename}_nut.brep"
        response["nutPreviewUrl"] = f"/preview/{spec.filename}_nut.stl"
    return response


@app.get("/preview/{filename}")
async def preview(filename: str):
    try:
        path = store.resolve(filename, suffix=".stl")
    except ArtifactNotFound:
        return JSONResponse(status_code=404, content={"error": "STL file not found"})
    return FileResponse(path, media_type="model/stl")


@app.get("/download/{filename}")
async def download(filename: str):
    try:
        path = store.resolve(filename, suffix=".brep")
    except ArtifactNotFound:
        return JSONResponse(status_code=404, content={"error": "BREP file not found"})
    return FileResponse(path, media_type="application/octet-stream", filename=filename)


if __name__ == "__main__":
    uvicorn.run("boltgen.main:app", host="0.0.0.0", port=3000, reload=True)
