"""Language reference: categorized examples of every LvZJ command."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ReferenceItem:
    code: str
    description: str


@dataclass(frozen=True)
class ReferenceCategory:
    name: str
    items: list[ReferenceItem] = field(default_factory=list)


def _cat(name: str, *items: tuple[str, str]) -> ReferenceCategory:
    return ReferenceCategory(name, [ReferenceItem(code, desc) for code, desc in items])


REFERENCE: list[ReferenceCategory] = [
    _cat(
        "Styly písma",
        ("(tučně)Tučný text", "Tučné písmo"),
        ("(kurzívou)Kurzíva", "Kurzíva"),
        ("(škrtnuté)Přeškrtnutý text", "Přeškrtnutí"),
        ("(horní index)text", "Horní index"),
        ("(dolní index)text", "Dolní index"),
        ("(strojově)Strojopis", "Strojové písmo"),
        ("(kapitálkami)Text kapitálkami", "Kapitálky"),
        ("(psacím písmem)Psací text", "Psací písmo"),
        ("(tučně)Tučně(normálně) a běžný text", "Zrušení stylování"),
    ),
    _cat(
        "Barvy",
        ("(červeně)Červený text", "Červená"),
        ("(zeleně)Zelený text", "Zelená"),
        ("(modře)Modrý text", "Modrá"),
        ("(žlutě)Žlutý text", "Žlutá"),
        ("(oranžově)Oranžový text", "Oranžová"),
        ("(růžově)Růžový text", "Růžová"),
        ("(fialově)Fialový text", "Fialová"),
        ("(hnědě)Hnědý text", "Hnědá"),
        ("(šedě)Šedý text", "Šedá"),
        ("(modrozeleně)Modrozelený text", "Modrozelená"),
        ("(bíle)Bílý text", "Bílá"),
        ("(černě)Černý text", "Černá"),
        ("(duhově)Duhový text", "Duhová"),
    ),
    _cat(
        "Podbarvení",
        ("(podbarvení)Zvýrazněný text", "Výchozí podbarvení"),
        ("(červené podbarvení)Text", "Červené podbarvení"),
        ("(zelené podbarvení)Text", "Zelené podbarvení"),
        ("(modré podbarvení)Text", "Modré podbarvení"),
        ("(podbarvení růžově)Text", "Růžové podbarvení"),
    ),
    _cat(
        "Kombinace",
        ("(tučně červeně)Tučný červený", "Tučně + červeně"),
        ("(kurzívou modře)Kurzíva modrá", "Kurzíva + modrá"),
        ("(tučně kurzívou zeleně)Text", "Kombinace tří stylů"),
        ("(škrtnuté šedě)Starý text", "Přeškrtnuté + šedě"),
        ("(tučně)Tučně (kurzívou)a ještě kurzívou", "Styly se sčítají"),
    ),
    _cat(
        "Odkazy",
        ("https://example.com", "Automatický odkaz"),
        ("(odkaz na https://example.com)text odkazu(konec)", "Vlastní text odkazu"),
        ("(odkaz na https://example.com)(tučně)tučný odkaz(konec odkazu)", "Stylovaný odkaz"),
    ),
    _cat(
        "Nadpisy a zarovnání",
        ("(nadpis)Velký nadpis", "Hlavní nadpis"),
        ("(malý nadpis)Menší nadpis", "Menší nadpis"),
        ("(doprostřed)Vycentrovaný text", "Zarovnání na střed"),
        ("(doprava)Text vpravo", "Zarovnání doprava"),
    ),
    _cat(
        "Seznamy",
        ("- první položka\n- druhá položka\n- třetí položka", "Odrážkový seznam"),
        ("(seznam číslovaný)\n- první\n- druhý\n(konec)", "Číslovaný seznam"),
        ("(seznam kladů a záporů)\n+ rychlé\n- drahé\n(konec)", "Klady a zápory"),
    ),
    _cat(
        "Boxíky",
        ("(boxík)Obsah boxíku(konec boxíku)", "Základní boxík"),
        ("(boxík \"Titulek\")Obsah(konec boxíku)", "Boxík s titulkem"),
        ("(modrý boxík \"Info\")Text(konec boxíku)", "Modrý boxík"),
        ("(zelený boxík \"Tip\")Text(konec boxíku)", "Zelený boxík"),
        ("(červený boxík \"Varování\")Text(konec boxíku)", "Červený boxík"),
        ("(boxík vpravo \"Poznámka\")Text vedle(konec boxíku)", "Plovoucí boxík"),
    ),
    _cat(
        "Citace",
        ("(citace)Citovaný text(konec citace)", "Základní citace"),
        ("(citace \"Autor\")Text citace(konec citace)", "Citace s autorem"),
        ("(citace \"Autor\" https://zdroj.cz)Text(konec citace)", "Citace s odkazem"),
    ),
    _cat(
        "Oddělovače",
        ("(oddělovač)", "Vodorovná čára"),
        ("(malý oddělovač)", "Menší čára"),
    ),
    _cat(
        "Žížalky",
        ("(žížalka 50 %)", "Progress bar na 50 %"),
        ("(žížalka 3 / 5)", "Progress bar 3 z 5"),
        ("(modrá žížalka 75 %)", "Modrý progress bar"),
        ("(zelená žížalka 8 / 10)", "Zelený progress bar"),
        ("(červená žížalka 25 %)", "Červený progress bar"),
    ),
    _cat(
        "Interaktivní prvky",
        ("(spoiler)Skrytý text(konec)", "Spoiler (klikni pro zobrazení)"),
        ("(odpočet do 31. 12. 2030 23:59)", "Odpočet do data"),
        ("(odpočet od 1. 1. 2020)", "Odpočet od data"),
        ("(odpočet slovně do 31. 12. 2030)", "Slovní odpočet"),
    ),
    _cat(
        "Speciální",
        ("(závorka)", "Zobrazí závorku bez zpracování"),
        ("(prostě)(tučně) se nezpracuje(azj)", "Text bez LvZJ zpracování"),
    ),
]


def iter_examples():
    """Yield ``(category, item)`` pairs in reference order."""
    for category in REFERENCE:
        for item in category.items:
            yield category.name, item
