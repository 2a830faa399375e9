"""Canned FIRMS CSV bodies."""

HEADER = (
    "latitude,longitude,bright_ti4,scan,track,acq_date,acq_time,"
    "satellite,instrument,confidence,version,bright_ti5,frp,daynight"
)
ROW_FONTANA = "34.0,-117.5,330,1,1,2024-01-01,1230,N,VIIRS,80,1,300,15,D"
# small, cool, low-power night hotspot: looks like a gas flare
ROW_FLARE = "31.9,-103.2,305.4,0.39,0.36,2024-01-01,0842,N,VIIRS,l,2.0NRT,280.1,1.2,N"
# hot enough but low confidence
ROW_WEAK = "34.1,-117.6,340.2,0.4,0.4,2024-01-01,2105,N,VIIRS,l,2.0NRT,290.0,8.5,N"
# big daytime fire, ~45 miles north-east of ROW_FONTANA
ROW_FAR = "34.5,-117.0,367.0,0.5,0.4,2024-01-02,5,N,VIIRS,h,2.0NRT,301.0,42.7,D"


def make_csv(*rows: str) -> str:
    return "\n".join((HEADER,) + rows) + "\n"
