"""Export routes — response CSV, JSON snapshot, SPICE netlist, text report."""

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from rlcsim_api.models import CircuitModel, CircuitRequest, ImportRequest
from rlcsim.export import export_csv, export_json, export_netlist, export_report, load_json, snapshot

logger = logging.getLogger(__name__)

router = APIRouter()


def _attachment(content: str, filename: str, media_type: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def _export(exporter, request: CircuitRequest, filename: str, media_type: str, label: str) -> Response:
    try:
        content = exporter(request.circuit.to_parameters())
    except Exception as e:
        logger.warning("%s export failed", label, exc_info=True)
        raise HTTPException(status_code=500, detail=f"{label} export failed: {str(e)}")
    return _attachment(content, filename, media_type)


@router.post("/export/csv")
async def export_csv_endpoint(request: CircuitRequest):
    """Frequency, gain, phase and impedance table (10 Hz – 100 kHz)."""
    return _export(export_csv, request, "rlc_response.csv", "text/csv", "CSV")


@router.post("/export/json")
async def export_json_endpoint(request: CircuitRequest):
    """Parameter snapshot with effective values and results."""
    return _export(export_json, request, "rlc_config.json", "application/json", "JSON")


@router.post("/export/netlist")
async def export_netlist_endpoint(request: CircuitRequest):
    """SPICE netlist of the circuit."""
    return _export(export_netlist, request, "rlc_circuit.cir", "text/plain", "Netlist")


@router.post("/export/report")
async def export_report_endpoint(request: CircuitRequest):
    """Plain-text summary of parameters, results and equations."""
    return _export(export_report, request, "rlc_report.txt", "text/plain", "Report")


@router.post("/import/json", response_model=CircuitModel)
async def import_json_endpoint(request: ImportRequest):
    """Read a JSON snapshot back into a circuit."""
    try:
        params = load_json(request.content)
    except ValueError as e:
        logger.warning("Snapshot import rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    return CircuitModel(**snapshot(params))
