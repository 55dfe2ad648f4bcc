"""Repository catalogue listing engine.

repocat stores repository records keyed by URI and answers listing requests
with a ranked, access-controlled, paginated sequence of repositories.

Usage
-----
Build a catalogue service and list repositories for an actor::

    from repocat.access import Actor, RequestContext
    from repocat.catalogue import RepoCatalogueService
    from repocat.listing import RepoListOp

    service = RepoCatalogueService(session_factory, provider=provider)
    await service.try_insert_new("github.com/octo/reef", "Reef tooling")
    ctx = RequestContext(actor=Actor(uid="1", login="octo", github_token=token))
    repos = await service.list(ctx, RepoListOp(query="reef", per_page=10))

"""
