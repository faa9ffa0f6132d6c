"""Detail view (info panel) contents for a selected person."""

from dataclasses import dataclass, field

from models import FEMALE, MALE, PersonId
from relationships import children_of, parents_of, siblings_of, spouses_of
from store import GraphStore


@dataclass
class PersonDetails:
    name: str
    birth: str | None
    death: str | None
    spouse_label: str
    parents: list[str] = field(default_factory=list)
    spouses: list[str] = field(default_factory=list)
    siblings: list[str] = field(default_factory=list)
    children: list[str] = field(default_factory=list)


def _spouse_label(gender: str) -> str:
    if gender == FEMALE:
        return "Husband"
    if gender == MALE:
        return "Wife"
    return "Spouse"


def person_details(store: GraphStore, person_id: PersonId) -> PersonDetails | None:
    """Collect the panel contents for a person; None if the id is unknown."""
    person = store.find_node(person_id)
    if person is None:
        return None

    def names(people):
        return [p.name or "" for p in people]

    return PersonDetails(
        name=person.display_name,
        birth=str(person.date_of_birth) if person.date_of_birth else None,
        death=str(person.date_of_death) if person.date_of_death else None,
        spouse_label=_spouse_label(person.gender),
        parents=names(parents_of(store, person_id)),
        spouses=names(spouses_of(store, person_id)),
        siblings=names(siblings_of(store, person_id)),
        children=names(children_of(store, person_id)),
    )


def format_details(details: PersonDetails) -> list[str]:
    """Render panel lines, leaving out sections with nothing to show."""
    lines = [details.name]
    if details.birth:
        lines.append(f"Born: {details.birth}")
    if details.death:
        lines.append(f"Died: {details.death}")

    sections = [
        ("Parents", details.parents),
        (details.spouse_label, details.spouses),
        ("Siblings", details.siblings),
        ("Children", details.children),
    ]
    for title, names in sections:
        if names:
            lines.append(f"{title}: {', '.join(names)}")
    return lines
