def scan(repository, batch_size=200, **criteria):
    """Yield every record matching ``criteria`` by paging through the store.

    Each page carries an explicit limit, so a store-side default page size
    never truncates a listing. Pages are ordered by ``id`` so that offsets
    stay stable across queries.
    """
    offset = 0
    while True:
        query = repository._dao.query
        if criteria:
            query = query.filter(**criteria)
        results = query.order_by("id").offset(offset).limit(batch_size).all()
        yield from results.items
        if len(results.items) < batch_size:
            break
        offset += batch_size
