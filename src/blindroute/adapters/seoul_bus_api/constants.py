"""Constants for the Seoul bus information API adapter.

API documentation: https://www.data.go.kr (서울특별시 버스 정보 조회 서비스)
Every request needs a ``serviceKey``; responses are requested as JSON.
"""

SEOUL_BUS_BASE_URL = "http://ws.bus.go.kr/api/rest"

STATION_BY_NAME_PATH = "stationinfo/getStationByName"  # ?stSrch=<stop name>
STATION_BY_UID_PATH = "stationinfo/getStationByUid"  # ?arsId=<ARS id>
BUS_ROUTE_LIST_PATH = "busRouteInfo/getBusRouteList"  # ?stSrch=<route number>
STATION_BY_ROUTE_PATH = "busRouteInfo/getStaionByRoute"  # ?busRouteId=<route id> (sic)
BUS_POS_BY_VEH_ID_PATH = "buspos/getBusPosByVehId"  # ?vehId=<vehicle id>

# msgHeader.headerCd values
HEADER_CODE_OK = "0"
HEADER_CODE_NO_RESULT = "4"
