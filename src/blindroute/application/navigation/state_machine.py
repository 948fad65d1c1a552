"""Pure transition function for the navigation session.

``transition`` never performs I/O: it returns the next state together with
the effects an executor has to run. Events that make no sense in the current
step (a late watcher signal, a second confirm while loading) leave the state
untouched and request nothing.
"""

from dataclasses import dataclass, replace

from blindroute.application.navigation.effects import (
    Announce,
    CancelBoarding,
    EndSession,
    NavigationEffect,
    ResolveRoutes,
    ScheduleBoarding,
    SearchStations,
    StopWatching,
    WatchArrival,
    WatchStationVisit,
)
from blindroute.application.navigation.events import (
    ArrivalUpdated,
    Arrived,
    Boarded,
    BoardingSettled,
    Confirm,
    GoBack,
    NavigationEvent,
    RoutingsLoaded,
    Started,
    StationsLoaded,
    StationVisitUpdated,
    TrackingFailed,
)
from blindroute.application.navigation.state import NavigationState
from blindroute.application.navigation.steps import ExitReason, PathFinderStep, StationRole
from blindroute.domain.models import Routing, Station

Step = PathFinderStep

# One step back from each state; LOCATION_CONFIRM leaves the session instead
PREVIOUS_STEP: dict[PathFinderStep, PathFinderStep] = {
    Step.SELECT_START: Step.LOCATION_CONFIRM,
    Step.SELECT_DESTINATION: Step.SELECT_START,
    Step.ROUTING_CONFIRM: Step.SELECT_DESTINATION,
    Step.RESERVATION_BUS_CONFIRM: Step.ROUTING_CONFIRM,
    Step.WAITING_BUS: Step.RESERVATION_BUS_CONFIRM,
    Step.RESERVATION_DES_CONFIRM: Step.RESERVATION_BUS_CONFIRM,
    Step.WAITING_DESTINATION: Step.RESERVATION_DES_CONFIRM,
}


@dataclass(frozen=True)
class Transition:
    """Result of applying one event."""

    state: NavigationState
    effects: tuple[NavigationEffect, ...] = ()


def _unchanged(state: NavigationState) -> Transition:
    return Transition(state)


def transition(state: NavigationState, event: NavigationEvent) -> Transition:
    """Apply ``event`` to ``state``."""
    if state.finished:
        return _unchanged(state)

    if isinstance(event, GoBack):
        return _go_back(state)
    if isinstance(event, TrackingFailed):
        return _on_tracking_failed(state)
    if isinstance(event, Started):
        if state.step is Step.LOCATION_CONFIRM:
            return Transition(state, _entry_effects(state))
        return _unchanged(state)

    handler = _HANDLERS.get(state.step)
    return handler(state, event) if handler else _unchanged(state)


def enter(state: NavigationState, step: PathFinderStep) -> Transition:
    """Move to ``step`` and request that step's entry effects."""
    entered = _reset_for(replace(state, step=step), step)
    return Transition(entered, _entry_effects(entered))


def _reset_for(state: NavigationState, step: PathFinderStep) -> NavigationState:
    """Clear data that belongs to ``step`` and every step after it."""
    if step is Step.SELECT_START:
        return replace(state, loading=True, start_candidates=(), start=None)
    if step is Step.SELECT_DESTINATION:
        return replace(state, loading=True, destination_candidates=(), destination=None)
    if step is Step.ROUTING_CONFIRM:
        return replace(
            state, loading=True, routing_candidates=(), routing=None, leg_index=0, boarded_veh_id=None
        )
    if step is Step.WAITING_BUS:
        return replace(state, loading=False, arrival_status=None, pending_veh_id=None)
    if step is Step.WAITING_DESTINATION:
        return replace(state, loading=False, visit_status=None)
    if step is Step.RESERVATION_BUS_CONFIRM:
        return replace(state, loading=False, pending_veh_id=None, boarded_veh_id=None)
    return replace(state, loading=False)


def _entry_effects(state: NavigationState) -> tuple[NavigationEffect, ...]:
    step = state.step
    forwarding = state.current_forwarding
    if step is Step.LOCATION_CONFIRM:
        return (
            Announce(
                f"출발지 {state.start_query}, 도착지 {state.destination_query}로 "
                "경로 탐색을 시작하려면 확인하세요."
            ),
        )
    if step is Step.SELECT_START:
        return (SearchStations(StationRole.START, state.start_query),)
    if step is Step.SELECT_DESTINATION:
        return (SearchStations(StationRole.DESTINATION, state.destination_query),)
    if step is Step.ROUTING_CONFIRM and state.start and state.destination:
        return (ResolveRoutes(state.start, state.destination),)
    if step is Step.RESERVATION_BUS_CONFIRM and forwarding:
        return (
            Announce(
                f"{forwarding.from_station_nm} 정류장에서 {forwarding.bus_route_nm}, "
                f"{forwarding.bus_route_dir} 방면 버스를 예약하려면 확인하세요."
            ),
        )
    if step is Step.WAITING_BUS and forwarding:
        return (WatchArrival(forwarding),)
    if step is Step.RESERVATION_DES_CONFIRM and forwarding:
        return (Announce(f"{forwarding.to_station_nm} 정류장 하차를 예약하려면 확인하세요."),)
    if step is Step.WAITING_DESTINATION and forwarding and state.boarded_veh_id:
        return (WatchStationVisit(forwarding, state.boarded_veh_id),)
    return ()


def _go_back(state: NavigationState) -> Transition:
    if state.step is Step.LOCATION_CONFIRM:
        return Transition(
            replace(state, exit_reason=ExitReason.RETURNED), (EndSession(ExitReason.RETURNED),)
        )

    leaving: tuple[NavigationEffect, ...] = ()
    if state.step is Step.WAITING_BUS:
        leaving = (StopWatching(), CancelBoarding(), Announce("버스 예약을 취소하였습니다."))
    elif state.step is Step.WAITING_DESTINATION:
        leaving = (StopWatching(), Announce("정류장 하차를 취소하였습니다."))

    entered = enter(state, PREVIOUS_STEP[state.step])
    return Transition(entered.state, leaving + entered.effects)


def _on_tracking_failed(state: NavigationState) -> Transition:
    if state.step not in (Step.WAITING_BUS, Step.WAITING_DESTINATION):
        return _unchanged(state)
    back = _go_back(state)
    return Transition(
        back.state, (Announce("실시간 정보를 가져올 수 없습니다."),) + back.effects
    )


def _select(candidates: tuple, selection: int | None) -> int | None:
    index = 0 if selection is None else selection
    return index if 0 <= index < len(candidates) else None


def _describe_stations(role: StationRole, stations: tuple[Station, ...]) -> str:
    label = "출발" if role is StationRole.START else "도착"
    options = " ".join(
        f"{number}번 {station.st_nm}, {station.st_dir} 방면."
        for number, station in enumerate(stations, start=1)
    )
    return f"{label} 정류장을 선택하세요. {options}"


def _describe_routings(routings: tuple[Routing, ...]) -> str:
    parts = ["경로를 선택하세요."]
    for number, routing in enumerate(routings, start=1):
        stops = ", ".join(
            f"{leg_number} 탑승 정류장: {forwarding.from_station_nm}"
            for leg_number, forwarding in enumerate(routing.forwarding, start=1)
        )
        parts.append(
            f"{number}번 경로, {len(routing.forwarding)}개의 버스를 탑승하며, 비용은 {routing.fare}원, "
            f"시간은 {routing.minutes}분이 소요됩니다. {stops}."
        )
        if routing.unresolved_legs:
            parts.append(f"안내할 수 없는 버스 구간이 {routing.unresolved_legs}개 있습니다.")
    return " ".join(parts)


def _on_station_step(state: NavigationState, event: NavigationEvent) -> Transition:
    role = StationRole.START if state.step is Step.SELECT_START else StationRole.DESTINATION
    candidates = state.start_candidates if role is StationRole.START else state.destination_candidates

    if isinstance(event, StationsLoaded):
        if event.role is not role or not state.loading:
            return _unchanged(state)
        if not event.stations:
            back = enter(state, PREVIOUS_STEP[state.step])
            return Transition(back.state, (Announce("검색된 정류장이 없습니다"),) + back.effects)
        field_name = "start_candidates" if role is StationRole.START else "destination_candidates"
        loaded = replace(state, loading=False, **{field_name: event.stations})
        return Transition(loaded, (Announce(_describe_stations(role, event.stations)),))

    if isinstance(event, Confirm):
        if state.loading or not candidates:
            return _unchanged(state)
        index = _select(candidates, event.selection)
        if index is None:
            return Transition(state, (Announce("잘못된 선택입니다."),))
        if role is StationRole.START:
            return enter(replace(state, start=candidates[index]), Step.SELECT_DESTINATION)
        return enter(replace(state, destination=candidates[index]), Step.ROUTING_CONFIRM)

    return _unchanged(state)


def _on_location_confirm(state: NavigationState, event: NavigationEvent) -> Transition:
    if isinstance(event, Confirm):
        return enter(state, Step.SELECT_START)
    return _unchanged(state)


def _on_routing_confirm(state: NavigationState, event: NavigationEvent) -> Transition:
    if isinstance(event, RoutingsLoaded):
        if not state.loading:
            return _unchanged(state)
        if not event.routings:
            back = enter(state, Step.SELECT_DESTINATION)
            return Transition(back.state, (Announce("검색된 경로가 없습니다"),) + back.effects)
        loaded = replace(state, loading=False, routing_candidates=event.routings)
        return Transition(loaded, (Announce(_describe_routings(event.routings)),))

    if isinstance(event, Confirm):
        if state.loading or not state.routing_candidates:
            return _unchanged(state)
        index = _select(state.routing_candidates, event.selection)
        if index is None:
            return Transition(state, (Announce("잘못된 선택입니다."),))
        chosen = replace(state, routing=state.routing_candidates[index], leg_index=0)
        return enter(chosen, Step.RESERVATION_BUS_CONFIRM)

    return _unchanged(state)


def _on_reservation_bus_confirm(state: NavigationState, event: NavigationEvent) -> Transition:
    if isinstance(event, Confirm) and state.current_forwarding:
        return enter(state, Step.WAITING_BUS)
    return _unchanged(state)


def _begin_boarding(state: NavigationState, veh_id: str) -> Transition:
    return Transition(
        replace(state, pending_veh_id=veh_id),
        (StopWatching(), Announce("버스가 도착했습니다."), ScheduleBoarding(veh_id)),
    )


def _on_waiting_bus(state: NavigationState, event: NavigationEvent) -> Transition:
    if state.pending_veh_id is not None:
        if isinstance(event, BoardingSettled) and event.veh_id == state.pending_veh_id:
            boarded = replace(state, boarded_veh_id=event.veh_id, pending_veh_id=None)
            return enter(boarded, Step.RESERVATION_DES_CONFIRM)
        return _unchanged(state)

    if isinstance(event, ArrivalUpdated):
        updated = replace(state, arrival_status=event.status)
        if state.arrival_status is not None or state.current_forwarding is None:
            return Transition(updated)
        forwarding = state.current_forwarding
        status = event.status
        message = f"{forwarding.bus_route_nm} 버스를 대기중입니다. {status.msg1}."
        if status.msg2:
            message += f" {status.msg2}."
        return Transition(updated, (Announce(message),))

    if isinstance(event, Boarded) and event.veh_id:
        return _begin_boarding(state, event.veh_id)

    if isinstance(event, Confirm):
        veh_id = state.arrival_status.veh_id1 if state.arrival_status else ""
        if not veh_id:
            return Transition(state, (Announce("도착 예정인 버스 정보가 없습니다."),))
        return _begin_boarding(state, veh_id)

    return _unchanged(state)


def _on_reservation_des_confirm(state: NavigationState, event: NavigationEvent) -> Transition:
    if isinstance(event, Confirm) and state.boarded_veh_id:
        return enter(state, Step.WAITING_DESTINATION)
    return _unchanged(state)


def _on_waiting_destination(state: NavigationState, event: NavigationEvent) -> Transition:
    forwarding = state.current_forwarding
    if isinstance(event, StationVisitUpdated):
        updated = replace(state, visit_status=event.status)
        if state.visit_status is not None or forwarding is None:
            return Transition(updated)
        return Transition(
            updated, (Announce(f"{forwarding.to_station_nm}로 이동 중 입니다. {event.status.msg}"),)
        )

    if not isinstance(event, Arrived | Confirm):
        return _unchanged(state)

    if state.is_last_leg:
        final_stop = forwarding.to_station_nm if forwarding else ""
        return Transition(
            replace(state, exit_reason=ExitReason.COMPLETED),
            (
                StopWatching(),
                Announce("정류장에 도착했습니다."),
                Announce(f"최종 목적지 {final_stop}에 도착했습니다."),
                Announce("경로 탐색을 종료합니다."),
                EndSession(ExitReason.COMPLETED),
            ),
        )

    next_leg = enter(replace(state, leg_index=state.leg_index + 1), Step.RESERVATION_BUS_CONFIRM)
    return Transition(
        next_leg.state, (StopWatching(), Announce("정류장에 도착했습니다.")) + next_leg.effects
    )


_HANDLERS = {
    Step.LOCATION_CONFIRM: _on_location_confirm,
    Step.SELECT_START: _on_station_step,
    Step.SELECT_DESTINATION: _on_station_step,
    Step.ROUTING_CONFIRM: _on_routing_confirm,
    Step.RESERVATION_BUS_CONFIRM: _on_reservation_bus_confirm,
    Step.WAITING_BUS: _on_waiting_bus,
    Step.RESERVATION_DES_CONFIRM: _on_reservation_des_confirm,
    Step.WAITING_DESTINATION: _on_waiting_destination,
}
