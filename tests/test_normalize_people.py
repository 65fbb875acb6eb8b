"""Tests for person normalization."""

from tedx_site.models import Asset, Host, LegacyTeamMember, Performer, Speaker, TeamMemberCard
from tedx_site.normalize.people import PersonView, full_name, to_person_view


class TestToPersonView:
    """Every person variant collapses into one display shape."""

    def test_speaker(self) -> None:
        speaker = Speaker(
            name=" Ada Lovelace ",
            job_title="Mathematician",
            linkedin="https://linkedin.com/in/ada",
            photo=Asset(url="//img/ada.jpg", description="Ada"),
        )

        view = to_person_view(speaker)

        assert view == PersonView(
            name="Ada Lovelace",
            role="Mathematician",
            photo=Asset(url="//img/ada.jpg", description="Ada"),
            linkedin="https://linkedin.com/in/ada",
        )

    def test_host_has_no_role(self) -> None:
        view = to_person_view(Host(name="Grace"))

        assert view.name == "Grace"
        assert view.role == ""

    def test_performer_name_falls_back_to_title(self) -> None:
        view = to_person_view(Performer(name="  ", title="String Quartet"))

        assert view.name == "String Quartet"
        assert view.role == "String Quartet"

    def test_team_member_card(self) -> None:
        card = TeamMemberCard(
            first_name="Ada",
            last_name="Lovelace",
            position_title="Head of Finance",
            linkedin_url="linkedin.com/in/ada",
            portrait=Asset(url="//img/p.jpg"),
        )

        view = to_person_view(card)

        assert view.name == "Ada Lovelace"
        assert view.role == "Head of Finance"
        assert view.photo is not None
        assert view.photo.url == "//img/p.jpg"
        assert view.linkedin == "linkedin.com/in/ada"

    def test_legacy_member(self) -> None:
        view = to_person_view(LegacyTeamMember(name="Old Timer", title="Advisor"))

        assert (view.name, view.role) == ("Old Timer", "Advisor")

    def test_photo_without_url_dropped(self) -> None:
        view = to_person_view(Speaker(name="Ada", photo=Asset(url=None, description="x")))

        assert view.photo is None


class TestPersonViewInitial:
    def test_initial(self) -> None:
        assert PersonView(name="ada", role="").initial == "A"

    def test_initial_without_name(self) -> None:
        assert PersonView(name="", role="").initial == "?"


class TestFullName:
    def test_card_joins_present_parts(self) -> None:
        assert full_name(TeamMemberCard(first_name="Ada", last_name=None)) == "Ada"

    def test_legacy_member(self) -> None:
        assert full_name(LegacyTeamMember(name=" Old Timer ")) == "Old Timer"
