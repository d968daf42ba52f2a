"""
FastAPI application for AAMVA barcode records
"""
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, List
from config import config
from aamva_decoder import decode
from aamva_encoder import encode_record
from aamva_models import RecordMetadata, ValidationReport
from aamva_validator import inspect_record, validate
from extraction_sanitizer import sanitize_extracted_fields
from jurisdictions import JURISDICTIONS, get_jurisdiction_info
from name_truncation import truncate_name


# Initialize FastAPI app
app = FastAPI(
    title=config.API_TITLE,
    version=config.API_VERSION,
    description=config.API_DESCRIPTION
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request models
class MetadataRequest(BaseModel):
    """Record metadata supplied by the client"""
    issuer_identification_number: str = Field(config.DEFAULT_IIN, description="6-digit AAMVA issuer identification number")
    standard_version: str = Field(config.DEFAULT_STANDARD_VERSION, description="AAMVA standard version, e.g. '10' for 2020")
    jurisdiction_version: str = Field(config.DEFAULT_JURISDICTION_VERSION, description="Jurisdiction version number")
    subfile_kind: str = Field(config.DEFAULT_SUBFILE_KIND, description="Subfile kind: 'DL' or 'ID'")
    country: str = Field(config.DEFAULT_COUNTRY, description="Country: 'USA' or 'CAN' (sets date byte order)")

    @field_validator('subfile_kind')
    @classmethod
    def validate_subfile_kind(cls, v):
        if v.upper() not in config.SUPPORTED_SUBFILE_KINDS:
            raise ValueError(f'subfile_kind must be one of {config.SUPPORTED_SUBFILE_KINDS}')
        return v.upper()

    @field_validator('country')
    @classmethod
    def validate_country(cls, v):
        if v.upper() not in config.SUPPORTED_COUNTRIES:
            raise ValueError(f'country must be one of {config.SUPPORTED_COUNTRIES}')
        return v.upper()

    def to_metadata(self) -> RecordMetadata:
        return RecordMetadata(**self.model_dump())


class EncodeRequest(BaseModel):
    """Request model for encoding and validating form values"""
    fields: Dict[str, str] = Field(..., description="AAMVA element tag -> value, e.g. {'DCS': 'SMITH'}")
    metadata: MetadataRequest = Field(default_factory=MetadataRequest)


class DecodeRequest(BaseModel):
    """Request model for decoding a raw record"""
    raw: str = Field(..., description="Raw record text as read from the PDF417 symbol")


class InspectRequest(BaseModel):
    """Request model for validating a raw record against form values"""
    raw: str = Field(..., description="Raw record text")
    fields: Optional[Dict[str, str]] = Field(None, description="Form values to compare against")
    metadata: MetadataRequest = Field(default_factory=MetadataRequest)


class TruncateRequest(BaseModel):
    """Request model for name truncation"""
    value: str
    limit: int = Field(config.NAME_TRUNCATION_LIMIT, gt=0)


class SanitizeRequest(BaseModel):
    """Request model for sanitizing data-extraction output"""
    extracted: Dict[str, Optional[str]]


# Response models
class EncodeResponse(BaseModel):
    """Response model for encoding"""
    success: bool
    raw: str
    byte_length: int
    designators: List[Dict] = []
    truncation: Dict[str, Dict] = {}
    quarantined_tags: List[str] = []


class DecodeResponse(BaseModel):
    """Response model for decoding"""
    success: bool
    fields: Dict[str, str] = {}
    unknown_fields: Dict[str, str] = {}
    diagnostics: List[Dict] = []
    header: Optional[Dict] = None


# API endpoints
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": config.API_TITLE,
        "version": config.API_VERSION,
        "endpoints": {
            "encode": "/encode - POST form values, get the raw record",
            "decode": "/decode - POST a raw record, get its elements",
            "validate": "/validate - POST form values, get a compliance report",
            "inspect": "/inspect - POST a raw record (and form values), get a compliance report",
            "truncate": "/truncate - POST a name, get its AAMVA truncation",
            "sanitize": "/sanitize - POST extraction output, get form-ready values",
            "jurisdictions": "/jurisdictions - GET supported jurisdictions",
            "health": "/health - GET endpoint to check API health",
            "docs": "/docs - Swagger UI documentation"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": config.API_TITLE,
        "version": config.API_VERSION
    }


@app.get("/jurisdictions")
async def list_jurisdictions():
    """List supported jurisdictions"""
    return [get_jurisdiction_info(code) for code in JURISDICTIONS]


@app.get("/jurisdictions/{code}")
async def get_jurisdiction(code: str):
    """Get one jurisdiction by its 2-letter code"""
    info = get_jurisdiction_info(code)
    if "error" in info:
        raise HTTPException(status_code=404, detail=info["error"])
    return info


@app.post("/encode", response_model=EncodeResponse)
async def encode_form(request: EncodeRequest):
    """
    Encode form values into an AAMVA record

    Example:
        ```json
        {
            "fields": {"DCS": "SMITH", "DAC": "JOHN", "DAQ": "D1234567"},
            "metadata": {"issuer_identification_number": "636005", "subfile_kind": "DL"}
        }
        ```
    """
    try:
        record = encode_record(request.fields, request.metadata.to_metadata())
        print(f"🧾 Encoded record: {record.byte_length} bytes")
        return EncodeResponse(
            success=True,
            raw=record.raw,
            byte_length=record.byte_length,
            designators=[d.model_dump() for d in record.designators],
            truncation={tag: t.model_dump() for tag, t in record.truncation.items()},
            quarantined_tags=record.quarantined_tags,
        )
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error encoding record: {str(e)}"
        )


@app.post("/decode", response_model=DecodeResponse)
async def decode_record(request: DecodeRequest):
    """
    Decode a raw AAMVA record

    A record without the '@' indicator or 'ANSI ' file type returns
    success=false with a fatal diagnostic.
    """
    try:
        result = decode(request.raw)
        print(f"🔎 Decoded {len(result.fields)} elements ({'fatal' if result.fatal else 'ok'})")
        return DecodeResponse(
            success=not result.fatal,
            fields=result.fields,
            unknown_fields=result.unknown_fields,
            diagnostics=[d.model_dump() for d in result.diagnostics],
            header=result.header.model_dump() if result.header else None,
        )
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error decoding record: {str(e)}"
        )


@app.post("/validate", response_model=ValidationReport)
async def validate_form(request: EncodeRequest):
    """Encode form values and return the compliance report"""
    try:
        report = validate(request.fields, request.metadata.to_metadata())
        print(f"📊 Compliance score: {report.overall_score}%")
        return report
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error validating record: {str(e)}"
        )


@app.post("/inspect", response_model=ValidationReport)
async def inspect_raw_record(request: InspectRequest):
    """Validate a raw record, optionally against form values"""
    try:
        report = inspect_record(request.raw, request.fields, request.metadata.to_metadata())
        print(f"📊 Compliance score: {report.overall_score}%")
        return report
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error inspecting record: {str(e)}"
        )


@app.post("/truncate")
async def truncate(request: TruncateRequest):
    """Apply AAMVA name truncation"""
    result = truncate_name(request.value, request.limit)
    return result.model_dump()


@app.post("/sanitize")
async def sanitize(request: SanitizeRequest):
    """Sanitize data-extraction output before merging it into a form"""
    try:
        return {"fields": sanitize_extracted_fields(request.extracted)}
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Error sanitizing fields: {str(e)}"
        )


# Run the application
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
